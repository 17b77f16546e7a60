import dataclasses
import random

import pytest

from uaparser import (
    OS, UNKNOWN, CatalogError, Client, Device, PatternError, RegexFile, UserAgent, UserAgentParser,
)
from uaparser.catalog import DEFAULT_REGEXES

from .conftest import SAMPLE_USER_AGENTS

FACETS = ('device', 'os', 'user_agent')


# -----------------------------
# Scenarios
# -----------------------------

FIREFOX_CATALOG = {
    'user_agent_parsers': [{
        'regex': r'Firefox/(\d+)\.(\d+)',
        'family_replacement': 'Firefox',
        'v1_replacement': '$1',
        'v2_replacement': '$2',
    }],
}


def test_firefox_rule_extracts_versions(make_parser):
    parser = make_parser(FIREFOX_CATALOG)
    result = parser.parse_user_agent('Mozilla/5.0 Firefox/89.0')
    assert result == UserAgent(family='Firefox', major='89', minor='0', patch=None)
    assert parser.parse_user_agent_set('Mozilla/5.0 Firefox/89.0') == result


def test_no_rule_matches_gives_default(make_parser):
    parser = make_parser(FIREFOX_CATALOG)
    assert parser.parse_user_agent('curl/7.64.1') == UserAgent()
    assert parser.parse_user_agent_set('curl/7.64.1') == UserAgent()
    assert parser.parse('curl/7.64.1') == Client()
    assert parser.parse_user_agent('curl/7.64.1').family == UNKNOWN


def test_first_rule_wins_for_both_strategies(make_parser):
    parser = make_parser({
        'device_parsers': [
            {'regex': 'iPhone', 'device_replacement': 'iPhone'},
            {'regex': 'iPhone OS', 'device_replacement': 'GenericPhone'},
        ],
    })
    ua = 'iPhone; CPU iPhone OS 15_0'
    assert parser.device_matcher.matching_indices(ua) == [0, 1]
    assert parser.parse_device(ua).family == 'iPhone'
    assert parser.parse_device_set(ua).family == 'iPhone'


def test_empty_template_result_is_absent(make_parser):
    parser = make_parser({
        'os_parsers': [{
            'regex': r'Android (\d+)(?:\.(\d+))?',
            'os_replacement': 'Android',
            'os_v1_replacement': '$1',
            'os_v2_replacement': '$2',
        }],
    })
    result = parser.parse_os('Linux; Android 11; SM-G991B')
    assert result == OS(family='Android', major='11')
    assert result.minor is None


def test_raw_capture_is_not_trimmed(make_parser):
    parser = make_parser({
        'user_agent_parsers': [{'regex': r'(Foo )bar'}],
        'device_parsers': [{'regex': r'(Foo )bar', 'device_replacement': '$1'}],
    })
    assert parser.parse_user_agent('Foo bar').family == 'Foo '
    assert parser.parse_device('Foo bar').family == 'Foo'


# -----------------------------
# Bundled catalog
# -----------------------------

def test_bundled_catalog_desktop_chrome(parser):
    client = parser.parse(SAMPLE_USER_AGENTS[0])
    assert client.user_agent == UserAgent('Chrome', '91', '0', '4472')
    assert client.os == OS('Windows', '10')
    assert client.device == Device()


def test_bundled_catalog_edge_before_chrome(parser):
    assert parser.parse_user_agent(SAMPLE_USER_AGENTS[1]) == UserAgent('Edge', '91', '0', '864')


def test_bundled_catalog_iphone(parser):
    client = parser.parse(SAMPLE_USER_AGENTS[4])
    assert client.user_agent == UserAgent('Mobile Safari', '14', '1', '1')
    assert client.os == OS('iOS', '14', '6')
    assert client.device == Device('iPhone', 'Apple', 'iPhone')


def test_bundled_catalog_samsung(parser):
    client = parser.parse(SAMPLE_USER_AGENTS[7])
    assert client.user_agent == UserAgent('Chrome Mobile', '91', '0', '4472')
    assert client.os == OS('Android', '11')
    assert client.device == Device('Samsung SM-G991B', 'Samsung', 'SM-G991B')


def test_bundled_catalog_mac(parser):
    client = parser.parse(SAMPLE_USER_AGENTS[6])
    assert client.user_agent == UserAgent('Safari', '14', '1', '1')
    assert client.os == OS('Mac OS X', '10', '15', '7')
    assert client.device == Device('Mac', 'Apple', 'Mac')


def test_bundled_catalog_crawlers(parser):
    googlebot = parser.parse(SAMPLE_USER_AGENTS[11])
    assert googlebot.user_agent == UserAgent('Googlebot', '2', '1')
    assert googlebot.device == Device('Spider', 'Spider', 'Desktop')
    assert googlebot.os == OS()

    slurp = parser.parse(SAMPLE_USER_AGENTS[12])
    assert slurp.user_agent == UserAgent('Yahoo! Slurp')
    assert slurp.device.family == 'Spider'


def test_bundled_catalog_tools(parser):
    assert parser.parse_user_agent('curl/7.64.1') == UserAgent('curl', '7', '64', '1')
    assert parser.parse('curl/7.64.1').device == Device()


def test_bundled_catalog_ie11(parser):
    client = parser.parse(SAMPLE_USER_AGENTS[10])
    assert client.user_agent == UserAgent('IE', '11', '0')
    assert client.os == OS('Windows', '7')


def test_empty_input(parser):
    assert parser.parse('') == Client()
    assert parser.parse_set('') == Client()


# -----------------------------
# Properties
# -----------------------------

@pytest.mark.parametrize('ua', SAMPLE_USER_AGENTS)
def test_strategies_are_equivalent(parser, ua):
    for facet in FACETS:
        ordered = getattr(parser, f'parse_{facet}')(ua)
        accelerated = getattr(parser, f'parse_{facet}_set')(ua)
        assert ordered == accelerated, facet
    assert parser.parse(ua) == parser.parse_set(ua)


def _reordered(regex_file):
    return RegexFile(
        user_agent_parsers=list(reversed(regex_file.user_agent_parsers)),
        os_parsers=list(reversed(regex_file.os_parsers)),
        device_parsers=list(reversed(regex_file.device_parsers)),
    )


def test_strategies_are_equivalent_on_reordered_catalog():
    parser = UserAgentParser(_reordered(RegexFile.from_yaml(DEFAULT_REGEXES)))
    for ua in SAMPLE_USER_AGENTS:
        assert parser.parse(ua) == parser.parse_set(ua), ua


def test_result_comes_from_lowest_matching_rule(parser):
    for ua in SAMPLE_USER_AGENTS:
        for facet in FACETS:
            matcher = getattr(parser, f'{facet}_matcher')
            indices = matcher.matching_indices(ua)
            if not indices:
                assert getattr(parser, f'parse_{facet}')(ua) == matcher.default()
                continue
            expected = matcher.rules[indices[0]].try_parse(ua)
            assert getattr(parser, f'parse_{facet}')(ua) == expected
            assert getattr(parser, f'parse_{facet}_set')(ua) == expected


def test_repeated_queries_are_deterministic(parser):
    for ua in SAMPLE_USER_AGENTS:
        first = parser.parse(ua)
        for _ in range(3):
            assert parser.parse(ua) == first
            assert parser.parse_set(ua) == first


# -----------------------------
# Construction
# -----------------------------

def test_from_bytes_and_from_file(tmp_path):
    data = DEFAULT_REGEXES.read_bytes()
    from_bytes = UserAgentParser.from_bytes(data)
    with open(DEFAULT_REGEXES, 'rb') as f:
        from_file = UserAgentParser.from_file(f)
    ua = SAMPLE_USER_AGENTS[4]
    assert from_bytes.parse(ua) == from_file.parse(ua)


def test_missing_catalog_file(tmp_path):
    with pytest.raises(CatalogError):
        UserAgentParser.from_yaml(tmp_path / 'nope.yaml')


def test_bad_pattern_aborts_construction(make_parser):
    with pytest.raises(PatternError) as exc_info:
        make_parser({
            'user_agent_parsers': [{'regex': 'ok'}],
            'device_parsers': [{'regex': 'fine'}, {'regex': '[broken'}],
        })
    assert exc_info.value.facet == 'device'
    assert exc_info.value.index == 1


def test_to_dict(parser):
    data = parser.parse('curl/7.64.1').to_dict()
    assert data['user_agent'] == {'family': 'curl', 'major': '7', 'minor': '64', 'patch': '1'}
    assert data['os'] == {'family': 'Other', 'major': None, 'minor': None, 'patch': None, 'patch_minor': None}
    assert data['device'] == {'family': 'Other', 'brand': None, 'model': None}


def test_lone_surrogate_in_input(parser):
    ua = 'Mozilla/5.0 Firefox/89.0 \ud800'
    ordered = parser.parse(ua)
    assert ordered == parser.parse_set(ua)
    assert ordered.user_agent == UserAgent('Firefox', '89', '0')
    for facet in FACETS:
        assert getattr(parser, f'parse_{facet}')('\udcff') == getattr(parser, f'parse_{facet}_set')('\udcff')


def _shuffled_subset(rng, entries, with_flags):
    picked = [e for e in entries if rng.random() < 0.7]
    rng.shuffle(picked)
    if with_flags:
        picked = [
            dataclasses.replace(e, regex_flag='i') if rng.random() < 0.3 else e
            for e in picked
        ]
    return picked


@pytest.mark.parametrize('seed', range(25))
def test_strategies_are_equivalent_on_generated_catalogs(seed):
    rng = random.Random(seed)
    bundled = RegexFile.from_yaml(DEFAULT_REGEXES)
    catalog = RegexFile(
        user_agent_parsers=_shuffled_subset(rng, bundled.user_agent_parsers, with_flags=False),
        os_parsers=_shuffled_subset(rng, bundled.os_parsers, with_flags=True),
        device_parsers=_shuffled_subset(rng, bundled.device_parsers, with_flags=True),
    )
    parser = UserAgentParser(catalog)
    corpus = SAMPLE_USER_AGENTS + [ua.upper() for ua in SAMPLE_USER_AGENTS] + [ua.lower() for ua in SAMPLE_USER_AGENTS]
    for ua in corpus:
        for facet in FACETS:
            ordered = getattr(parser, f'parse_{facet}')(ua)
            accelerated = getattr(parser, f'parse_{facet}_set')(ua)
            assert ordered == accelerated, (seed, facet, ua)

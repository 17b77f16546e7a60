import argparse
import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path

import yaml

from config import Config
from report.excel import ExcelReporter
from report.html import HtmlReporter
from uaparser import ParserError, UserAgentParser
from uaparser.analyzer import STRATEGIES, UserAgentLogAnalyzer


def build_arg_parser():
    parser = argparse.ArgumentParser(description='User-Agent parser')
    parser.add_argument('--config', help='Path to config.yaml')
    parser.add_argument('--regexes', help='Path to regexes.yaml (default: bundled catalog)')
    commands = parser.add_subparsers(dest='command', required=True)

    parse_cmd = commands.add_parser('parse', help='Parse user agent strings and print JSON')
    parse_cmd.add_argument('user_agents', nargs='+', help='Raw User-Agent strings')
    parse_cmd.add_argument('--set', action='store_true', help='Use the set-accelerated strategy')

    log_cmd = commands.add_parser('log', help='Analyze user agents in access logs')
    log_cmd.add_argument('log_path', help='Path to access.log or directory')
    log_cmd.add_argument('--format', choices=['excel', 'html', 'all'], help='Report format')
    log_cmd.add_argument('--output', default='results', help='Directory for reports')
    log_cmd.add_argument('--strategy', choices=STRATEGIES, help='Matching strategy')
    log_cmd.add_argument('--verbose', action='store_true')

    bench_cmd = commands.add_parser('bench', help='Compare ordered and set-accelerated strategies')
    bench_cmd.add_argument('cases', help='YAML file with test_cases: [{user_agent_string: ...}]')
    bench_cmd.add_argument('--repeat', type=int, default=1)
    return parser


def load_parser(cfg):
    regexes_path = cfg.get('parser.regexes_path')
    size_limit = cfg.get('parser.size_limit')
    if regexes_path:
        return UserAgentParser.from_yaml(regexes_path, size_limit)
    return UserAgentParser.from_default(size_limit)


def cmd_parse(ua_parser, args, out):
    parse = ua_parser.parse_set if args.set else ua_parser.parse
    results = [dict(user_agent_string=ua, **parse(ua).to_dict()) for ua in args.user_agents]
    json.dump(results, out, ensure_ascii=False, indent=2)
    out.write('\n')
    return 0


def cmd_log(ua_parser, cfg, args):
    strategy = args.strategy or cfg.get('parser.strategy')
    analyzer = UserAgentLogAnalyzer(ua_parser, args.log_path, strategy=strategy, verbose=args.verbose)
    stats = analyzer.analyze()
    top_n = cfg.get('report.top_n')
    analyzer.print_summary(stats, top_n=10)

    results_dir = Path(args.output)
    results_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    report_file_excel = results_dir / f"ua_report_{timestamp}.xlsx"

    report_format = args.format or cfg.get('report.format')
    formats = [report_format] if report_format != 'all' else ['excel', 'html']
    summary_extra = {'Стратегия': strategy, 'Файлов': len(analyzer.log_files)}

    if 'excel' in formats:
        ExcelReporter(str(report_file_excel), top_n=top_n).generate(stats, summary_extra)
    if 'html' in formats:
        HtmlReporter(str(report_file_excel), top_n=top_n).generate(stats, summary_extra)
    return 0


def _time_strategy(parse, user_agents, repeat):
    start = time.perf_counter()
    for _ in range(repeat):
        for ua in user_agents:
            parse(ua)
    return time.perf_counter() - start


def cmd_bench(ua_parser, args, out):
    with open(args.cases, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    user_agents = [case['user_agent_string'] for case in data.get('test_cases', [])]
    if not user_agents:
        print(f"В файле {args.cases} нет test_cases", file=sys.stderr)
        return 1

    mismatches = [ua for ua in user_agents if ua_parser.parse(ua) != ua_parser.parse_set(ua)]

    print(f"Строк: {len(user_agents)}, повторов: {args.repeat}", file=out)
    for facet in ('device', 'os', 'user_agent'):
        ordered = getattr(ua_parser, f'parse_{facet}')
        accelerated = getattr(ua_parser, f'parse_{facet}_set')
        t_iter = _time_strategy(ordered, user_agents, args.repeat)
        t_set = _time_strategy(accelerated, user_agents, args.repeat)
        print(f"  {facet:<11} iter: {t_iter:.4f}s  set: {t_set:.4f}s", file=out)

    if mismatches:
        print(f"Расхождения между стратегиями: {len(mismatches)}", file=out)
        for ua in mismatches[:20]:
            print(f"  {ua}", file=out)
        return 1
    return 0


def main(argv=None):
    args = build_arg_parser().parse_args(argv)

    cfg = Config(args.config)
    if args.regexes:
        cfg.config['parser']['regexes_path'] = args.regexes

    logging.basicConfig(
        level=cfg.get('logging.level', 'WARNING'),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        ua_parser = load_parser(cfg)
    except ParserError as e:
        print(f"Ошибка: {e}", file=sys.stderr)
        return 2

    if args.command == 'parse':
        return cmd_parse(ua_parser, args, sys.stdout)
    try:
        if args.command == 'log':
            return cmd_log(ua_parser, cfg, args)
        return cmd_bench(ua_parser, args, sys.stdout)
    except (FileNotFoundError, ValueError) as e:
        print(f"Ошибка: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())

import pandas as pd


def counter_rows(counter, top_n=None):
    """Строки таблицы для счётчика: значение, количество, доля"""
    total = sum(counter.values())
    rows = []
    for name, count in counter.most_common(top_n):
        share = count * 100 / total if total else 0
        rows.append({'Значение': name, 'Количество': count, 'Доля (%)': round(share, 2)})
    return rows


SHEETS = [
    ('Клиенты', 'clients'),
    ('Версии клиентов', 'client_versions'),
    ('ОС', 'os'),
    ('Устройства', 'devices'),
    ('Бренды', 'brands'),
    ('Типы устройств', 'form_factors'),
    ('User-Agent', 'user_agents'),
]


class ExcelReporter:
    """Генератор отчетов в Excel"""

    def __init__(self, output_path, top_n=None):
        self.output_path = output_path
        self.top_n = top_n

    def generate(self, stats, summary_extra=None):
        """Генерирует Excel отчет"""
        print(f"\nГенерация отчета: {self.output_path}")

        with pd.ExcelWriter(self.output_path, engine='openpyxl') as writer:
            summary_data = {
                'Метрика': [
                    'Всего строк',
                    'Распознано строк',
                    'Не распознано строк',
                    'Пустых User-Agent',
                    'Уникальных User-Agent',
                ],
                'Значение': [
                    stats['total_lines'],
                    stats['parsed_lines'],
                    stats['unparsed_lines'],
                    stats['empty_user_agents'],
                    len(stats['user_agents']),
                ]
            }

            if summary_extra:
                for k, v in summary_extra.items():
                    summary_data['Метрика'].append(k)
                    summary_data['Значение'].append(v)

            pd.DataFrame(summary_data).to_excel(writer, sheet_name='Сводка', index=False)

            for sheet_name, key in SHEETS:
                rows = counter_rows(stats[key], self.top_n)
                if not rows:
                    continue
                df = pd.DataFrame(rows)
                if key == 'user_agents':
                    df['Значение'] = df['Значение'].str.slice(0, 500)
                df.to_excel(writer, sheet_name=sheet_name, index=False)

        print(f"Excel отчет сохранен: {self.output_path}")
        return self.output_path

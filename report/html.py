import html
from datetime import datetime

from .excel import SHEETS, counter_rows


class HtmlReporter:
    """Генератор отчетов в HTML"""

    def __init__(self, output_path, top_n=None):
        self.output_path = str(output_path).replace('.xlsx', '.html')
        self.top_n = top_n

    def render(self, stats, summary_extra=None):
        summary_rows = [
            ('Всего строк', stats['total_lines']),
            ('Распознано строк', stats['parsed_lines']),
            ('Не распознано строк', stats['unparsed_lines']),
            ('Уникальных User-Agent', len(stats['user_agents'])),
        ]
        if summary_extra:
            for k, v in summary_extra.items():
                summary_rows.append((k, v))

        html_content = f"""
        <!DOCTYPE html>
        <html lang="ru">
        <head>
            <meta charset="UTF-8">
            <meta name="viewport" content="width=device-width, initial-scale=1.0">
            <title>Отчет по User-Agent</title>
            <style>
                body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; max-width: 1200px; margin: 0 auto; padding: 20px; background: #f5f5f5; }}
                .container {{ background: white; padding: 30px; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }}
                h1 {{ border-bottom: 2px solid #eee; padding-bottom: 10px; color: #2c3e50; }}
                h2 {{ margin-top: 30px; border-left: 4px solid #3498db; padding-left: 10px; color: #2c3e50; }}
                table {{ width: 100%; border-collapse: collapse; margin-bottom: 20px; font-size: 14px; }}
                th, td {{ padding: 12px; text-align: left; border-bottom: 1px solid #ddd; }}
                th {{ background-color: #f8f9fa; font-weight: 600; }}
                .grid {{ display: grid; grid-template-columns: repeat(auto-fill, minmax(220px, 1fr)); gap: 20px; }}
                .stat-box {{ background: #f8f9fa; padding: 15px; border-radius: 6px; text-align: center; }}
                .stat-value {{ font-size: 24px; font-weight: bold; color: #2c3e50; }}
                .stat-label {{ font-size: 14px; color: #7f8c8d; }}
            </style>
        </head>
        <body>
            <div class="container">
                <h1>Отчет по User-Agent</h1>
                <p>Сгенерирован: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}</p>

                <h2>Сводка</h2>
                <div class="grid">
        """

        for label, value in summary_rows:
            html_content += f"""
                    <div class="stat-box">
                        <div class="stat-value">{html.escape(str(value))}</div>
                        <div class="stat-label">{html.escape(label)}</div>
                    </div>
            """
        html_content += """
                </div>
        """

        for title, key in SHEETS:
            rows = counter_rows(stats[key], self.top_n)
            if not rows:
                continue
            html_content += f"""
                <h2>{html.escape(title)}</h2>
                <table>
                    <thead><tr><th>Значение</th><th>Количество</th><th>Доля (%)</th></tr></thead>
                    <tbody>
            """
            for row in rows:
                html_content += (
                    f"<tr><td>{html.escape(str(row['Значение']))}</td>"
                    f"<td>{row['Количество']}</td><td>{row['Доля (%)']:.2f}</td></tr>\n"
                )
            html_content += """
                    </tbody>
                </table>
            """

        html_content += """
            </div>
        </body>
        </html>
        """
        return html_content

    def generate(self, stats, summary_extra=None):
        """Генерирует HTML отчет"""
        print(f"\nГенерация HTML отчета: {self.output_path}")
        with open(self.output_path, 'w', encoding='utf-8') as f:
            f.write(self.render(stats, summary_extra))
        print(f"HTML отчет сохранен: {self.output_path}")
        return self.output_path

from .csv_loader import CsvLoadError, load_records, load_table, parse_csv_table, parse_csv_text

__all__ = [
    "CsvLoadError",
    "load_records",
    "load_table",
    "parse_csv_table",
    "parse_csv_text",
]

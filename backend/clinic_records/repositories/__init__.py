from .csv_storage import SCHEMAS, CsvStorage, RecordSchema

__all__ = ["CsvStorage", "RecordSchema", "SCHEMAS"]

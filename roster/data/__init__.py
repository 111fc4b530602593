"""Record normalization, CSV codec, filters, and import/export boundary."""
from .normalize import normalize_gender, email_domain, text_key
from .schemas import DecodeResult, ImportReport, Page, RecordFilter
from .csv_codec import encode, decode
from .importer import import_csv
from .export import CsvDownload, export_filename, to_download, read_upload

"""Record parsing, filter engine, and in-memory session store."""
from .errors import EmptyDatasetError, EmptyExportError, MalformedRowSkipped
from .filters import apply_filters, distinct_values
from .loader import parse_records, parse_records_with_stats, records_to_frame, frame_to_records
from .schemas import Dimension, FilterSelection, TaxCreditRecord
from .store import DataStore

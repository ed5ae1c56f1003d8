# Span limits used by browsers; larger values are capped rather than allocated.
MAX_COLSPAN = 1000
MAX_ROWSPAN = 65534

DEFAULT_PARSER_FEATURES = "html5lib"
DEFAULT_FILE_ENCODING = "utf-8"
DEFAULT_REQUEST_TIMEOUT = 30.0
URL_SCHEMES = ("http://", "https://")

TABLE_FILENAME_TEMPLATE = "table_{index}.csv"
CSV_ENCODING = "utf-8"

DEBUG_PREVIEW_CHARS = 200

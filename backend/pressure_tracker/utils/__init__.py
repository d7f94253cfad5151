from .audit_logger import audit_log
from .classification import classify_pressure, STATUS_ORDER
from .validators import validate_measurement, FIELD_RANGES
from .stats import summarize, count_statuses, clamp_limit

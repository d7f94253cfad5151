"""
Blood pressure status classification.
"""

NORMAL = 'normal'

# Checked top to bottom; a rule matches when EITHER value reaches its threshold.
STATUS_RULES = (
    # (status, systolic >=, diastolic >=)
    ('danger', 180, 120),
    ('high', 160, 100),
    ('elevated', 140, 90),
    ('prehypertension', 120, 80),
)

# Least to most severe
STATUS_ORDER = (NORMAL,) + tuple(status for status, _, _ in reversed(STATUS_RULES))


def classify_pressure(systolic, diastolic):
    """Classify a systolic/diastolic pair into a severity tier."""
    for status, systolic_min, diastolic_min in STATUS_RULES:
        if systolic >= systolic_min or diastolic >= diastolic_min:
            return status
    return NORMAL

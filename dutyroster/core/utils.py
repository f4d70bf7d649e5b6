# dutyroster/core/utils.py
import datetime


def get_today() -> datetime.date:
    """Today's date; wrapped so routes and tests can patch a fixed day."""
    return datetime.date.today()

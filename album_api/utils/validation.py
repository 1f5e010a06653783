"""
Field-requirement tables and the two pure functions that work over them.

A table maps each recognized field to whether it is required::

    ALBUM_FIELDS = {"ownerid": True, "name": True, "date": True, "email": False}
"""
from typing import Any, Dict, Mapping, Optional

FieldRequirements = Mapping[str, bool]

# 관계형 저장소 INTEGER 컬럼 범위 (signed 64-bit)
MIN_DB_INT = -(2 ** 63)
MAX_DB_INT = 2 ** 63 - 1

ALBUM_FIELDS: FieldRequirements = {
    "ownerid": True,
    "name": True,
    "date": True,
    "email": False,
}

PHOTO_FIELDS: FieldRequirements = {
    "userid": True,
    "albumid": True,
    "caption": False,
    "data": True,
}

USER_FIELDS: FieldRequirements = {
    "userID": True,
    "email": True,
    "password": True,
}

LOGIN_FIELDS: FieldRequirements = {
    "userID": True,
    "password": True,
}


def _is_present(value: Any) -> bool:
    # 0 and False count as present; None and blank strings do not
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def validate_against_schema(record: Any, requirements: FieldRequirements) -> bool:
    """
    Return True when ``record`` is a mapping carrying every required field.
    """
    if not isinstance(record, Mapping):
        return False
    return all(
        _is_present(record.get(field))
        for field, required in requirements.items()
        if required
    )


def extract_valid_fields(record: Mapping[str, Any], requirements: FieldRequirements) -> Dict[str, Any]:
    """
    Project ``record`` onto the recognized fields, dropping everything else.
    Optional fields that are absent stay absent.
    """
    return {
        field: record[field]
        for field in requirements
        if field in record
    }


def parse_resource_id(raw: Any) -> Optional[int]:
    """
    Parse a path id. Returns None for anything that cannot name a row.
    """
    try:
        value = int(str(raw).strip())
    except ValueError:
        return None
    return value if 0 < value <= MAX_DB_INT else None


def fits_db_int(value: int) -> bool:
    return MIN_DB_INT <= value <= MAX_DB_INT

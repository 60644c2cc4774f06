from core.services.common.values import coerce_date, coerce_enum, coerce_int

__all__ = ["coerce_date", "coerce_enum", "coerce_int"]

# reviewpulse/modules/analytics/services/tenant_match.py

"""
Tenant matching.

Review documents carry the tenant (business profile) identifier as a
number, as a string, or only through its display name. A ``TenantMatch``
treats all three forms as the same tenant.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional

ALL_TENANTS = "all"


def normalize_tenant_id(value: Any) -> str:
    """Render a stored tenant id as text; integral floats lose their ``.0``"""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _as_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class TenantMatch:
    """Tenant filter matching by string id, numeric id or display name"""

    text: str
    number: Optional[float] = None

    @classmethod
    def parse(cls, value: Any) -> Optional["TenantMatch"]:
        """Build a match from a caller value; ``None``, blank and ``"all"`` mean no filter"""
        if value is None:
            return None
        if isinstance(value, TenantMatch):
            return value

        text = normalize_tenant_id(value)
        if not text or text.lower() == ALL_TENANTS:
            return None
        return cls(text=text, number=_as_number(value))

    @property
    def is_numeric(self) -> bool:
        return self.number is not None

    def matches(self, tenant_id: Any, tenant_name: Optional[str] = None) -> bool:
        if tenant_id is not None and normalize_tenant_id(tenant_id) == self.text:
            return True

        if self.number is not None:
            stored = _as_number(tenant_id)
            if stored is not None and stored == self.number:
                return True

        return tenant_name is not None and tenant_name.strip() == self.text

    def matches_record(self, record) -> bool:
        return self.matches(record.tenant_id, record.tenant_name)

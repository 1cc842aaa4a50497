from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class SystemVersion:
    """One firmware component listed under ``Device.SystemVersions.Components``."""
    name: Optional[str] = None
    category: Optional[str] = None
    version: Optional[str] = None

    _extra_fields: Dict[str, Any] = field(default_factory=dict, repr=False)

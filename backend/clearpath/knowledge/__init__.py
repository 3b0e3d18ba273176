from ..engine.errors import UnknownJurisdiction
from .base import Jurisdiction
from .dc import DC_JURISDICTION

JURISDICTIONS: dict[str, Jurisdiction] = {
    "dc": DC_JURISDICTION,
}

for _jurisdiction in JURISDICTIONS.values():
    _jurisdiction.validate()


def get_jurisdiction(jurisdiction_id: str) -> Jurisdiction:
    try:
        return JURISDICTIONS[jurisdiction_id.lower()]
    except KeyError:
        raise UnknownJurisdiction(jurisdiction_id) from None

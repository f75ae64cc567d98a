"""Error taxonomy shared by the matching, negotiation and carrier services.

Services raise these; routers translate them into HTTP responses.
"""


class CarrierSalesError(Exception):
    """Base class for expected, caller-visible failures."""


class InvalidInput(CarrierSalesError):
    """A required field is missing or unusable (e.g. no load_id)."""


class NotFound(CarrierSalesError):
    """The referenced load does not exist in the current snapshot."""


class Unavailable(CarrierSalesError):
    """An external lookup failed or is not configured.

    Never surfaced to API callers: the eligibility service falls back to a
    permissive result instead.
    """

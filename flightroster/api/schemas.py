"""
Request schemas and parsing helpers.

Payloads use camelCase on the wire; the models expose snake_case
attributes through an alias generator. Parsing failures are raised as
RequestValidationError so they reach the client as a 400 envelope before
the repository is touched.
"""

from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from flightroster.errors import RequestValidationError
from flightroster.models.flight import FLIGHT_CODE_MAX_LENGTH, FlightCategory
from flightroster.services.search import FlightSearchCriteria, PassengerSearchCriteria

SchemaT = TypeVar('SchemaT', bound=BaseModel)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
    )


# -----------------------------------------------------------------------------
# Bodies
# -----------------------------------------------------------------------------

class PassengerPayload(CamelModel):
    """A complete passenger, as sent when creating a flight or adding a passenger."""

    id: int = Field(..., gt=0, strict=True, examples=[139577])
    name: str = Field(..., min_length=1, examples=['Ana Torres'])
    has_connections: bool
    age: int = Field(..., ge=0)
    flight_category: FlightCategory
    reservation_id: str = Field(..., min_length=1, examples=['8ZC5KYVK'])
    has_checked_baggage: bool

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode='json')


class PassengerPatch(CamelModel):
    """Partial passenger update; only the fields sent are merged."""

    id: Optional[int] = Field(default=None, gt=0, strict=True)
    name: Optional[str] = Field(default=None, min_length=1)
    has_connections: Optional[bool] = None
    age: Optional[int] = Field(default=None, ge=0)
    flight_category: Optional[FlightCategory] = None
    reservation_id: Optional[str] = Field(default=None, min_length=1)
    has_checked_baggage: Optional[bool] = None

    def to_changes(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode='json', exclude_unset=True, exclude_none=True)


class FlightCreateRequest(CamelModel):
    flight_code: str = Field(..., min_length=1, max_length=FLIGHT_CODE_MAX_LENGTH, examples=['LAN123'])
    passengers: List[PassengerPayload]

    def passenger_documents(self) -> List[Dict[str, Any]]:
        return [p.to_document() for p in self.passengers]


class FlightUpdateRequest(CamelModel):
    """Partial flight update; a passengers list replaces the stored one wholesale."""

    flight_code: Optional[str] = Field(default=None, min_length=1, max_length=FLIGHT_CODE_MAX_LENGTH)
    passengers: Optional[List[PassengerPayload]] = None

    def to_changes(self) -> Dict[str, Any]:
        changes: Dict[str, Any] = {}
        if self.flight_code is not None:
            changes['flightCode'] = self.flight_code
        if self.passengers is not None:
            changes['passengers'] = [p.to_document() for p in self.passengers]
        return changes


# -----------------------------------------------------------------------------
# Query strings
# -----------------------------------------------------------------------------

def _query_flag(value: Any) -> Any:
    """'true'/'false' become booleans; any other string is ignored."""
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == 'true':
            return True
        if lowered == 'false':
            return False
        return None
    return value


class FlightSearchQuery(CamelModel):
    flight_code: Optional[str] = None
    reservation_id: Optional[str] = None
    flight_category: Optional[FlightCategory] = None
    has_connections: Optional[bool] = None
    has_checked_baggage: Optional[bool] = None

    @field_validator('has_connections', 'has_checked_baggage', mode='before')
    @classmethod
    def parse_flag(cls, value: Any) -> Any:
        return _query_flag(value)

    def to_criteria(self) -> FlightSearchCriteria:
        return FlightSearchCriteria(**self.model_dump())


class PassengerSearchQuery(CamelModel):
    id: Optional[int] = None
    name: Optional[str] = None
    reservation_id: Optional[str] = None
    flight_category: Optional[FlightCategory] = None
    has_connections: Optional[bool] = None
    has_checked_baggage: Optional[bool] = None
    min_age: Optional[int] = None
    max_age: Optional[int] = None

    @field_validator('has_connections', 'has_checked_baggage', mode='before')
    @classmethod
    def parse_flag(cls, value: Any) -> Any:
        return _query_flag(value)

    def to_criteria(self) -> PassengerSearchCriteria:
        return PassengerSearchCriteria(**self.model_dump())


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def format_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into one readable message."""
    parts = []
    for item in error.errors():
        location = '.'.join(str(part) for part in item['loc'])
        parts.append(f"{location}: {item['msg']}" if location else item['msg'])
    return '; '.join(parts)


def parse_body(schema: Type[SchemaT], payload: Any) -> SchemaT:
    """Validate a JSON body against a schema."""
    if not isinstance(payload, dict):
        raise RequestValidationError('Request body must be a JSON object')
    try:
        return schema.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(format_validation_error(e)) from e


def parse_query(schema: Type[SchemaT], args: Mapping[str, str]) -> SchemaT:
    """Validate query parameters; empty values are treated as absent."""
    values = {key: value for key, value in args.items() if value != ''}
    try:
        return schema.model_validate(values)
    except ValidationError as e:
        raise RequestValidationError(format_validation_error(e)) from e


def parse_passenger_id(raw: str) -> int:
    """Path parameters arrive as strings; reject anything that is not an integer."""
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise RequestValidationError(f'A valid passenger ID is required, got {raw!r}') from None

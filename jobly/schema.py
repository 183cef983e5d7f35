"""
Request body schemas.

Bodies are validated with pydantic; unknown fields are rejected so a
PATCH can only touch the columns listed here.
"""

from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

# Largest value a 64-bit SQL INTEGER holds
MAX_BIGINT = 2**63 - 1


class CompanyNew(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees", ge=0, le=MAX_BIGINT)
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class CompanyUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, alias="numEmployees", ge=0, le=MAX_BIGINT)
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class JobNew(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0, le=MAX_BIGINT)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., alias="companyHandle", min_length=1)


class JobUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0, le=MAX_BIGINT)
    equity: Optional[float] = Field(None, ge=0, le=1)


def to_payload(body: BaseModel, partial: bool = False) -> Dict[str, Any]:
    """Dump a body using API field names; partial keeps only the fields the client sent."""
    return body.model_dump(by_alias=True, exclude_unset=partial)


def validation_messages(errors: Sequence[Dict[str, Any]]) -> List[str]:
    """
    Flatten pydantic error dicts into readable messages.
    Returns one "location: message" string per error.
    """
    messages: List[str] = []
    for err in errors:
        loc = ".".join(str(part) for part in err.get("loc", ()))
        msg = err.get("msg", "invalid")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return messages

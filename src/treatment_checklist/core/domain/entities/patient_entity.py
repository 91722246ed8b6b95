from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from treatment_checklist.core.domain.entities._base import EntityMixin


@dataclass(frozen=True, slots=True)
class GuardianEntity(EntityMixin):
    full_name: str | None = None
    phone_primary: str | None = None
    phone_secondary: str | None = None
    email: str | None = None
    relationship: str | None = None


@dataclass(frozen=True, slots=True)
class AddressEntity(EntityMixin):
    street: str
    number: str
    city: str
    state: str
    zip_code: str
    complement: str | None = None
    neighborhood: str | None = None


@dataclass(frozen=True, slots=True)
class PatientEntity(EntityMixin):
    id: str
    full_name: str | None
    main_diagnosis: str | None = None
    guardian: GuardianEntity | None = None
    address: AddressEntity | None = None
    birth_date: date | None = None
    active: bool = True

    @property
    def guardian_name(self) -> str:
        return (self.guardian.full_name if self.guardian else None) or ""

    @property
    def guardian_phone(self) -> str:
        return (self.guardian.phone_primary if self.guardian else None) or ""

# Entity models - field names match the backing JSON document
from typing import Dict, List, Optional
from dataclasses import dataclass, field, asdict


@dataclass
class Person:
    """Resident record"""
    firstName: str
    lastName: str
    address: str = ""
    city: str = ""
    zip: str = ""
    phone: str = ""
    email: str = ""


@dataclass
class FireStation:
    """Address -> station number mapping"""
    address: str
    station: str


@dataclass
class MedicalRecord:
    """Medical record keyed by (firstName, lastName)"""
    firstName: str
    lastName: str
    birthdate: str = ""  # MM/dd/yyyy
    medications: List[str] = field(default_factory=list)
    allergies: List[str] = field(default_factory=list)


def normalize_key(value: Optional[str]) -> str:
    """Normalize an identity field: trim and casefold. None becomes ''."""
    if value is None:
        return ""
    return value.strip().casefold()


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def person_from_dict(data: Dict) -> Person:
    return Person(
        firstName=data.get("firstName") or "",
        lastName=data.get("lastName") or "",
        address=data.get("address") or "",
        city=data.get("city") or "",
        zip=str(data.get("zip") or ""),
        phone=data.get("phone") or "",
        email=data.get("email") or "",
    )


def fire_station_from_dict(data: Dict) -> FireStation:
    return FireStation(
        address=data.get("address") or "",
        station=str(data.get("station") or ""),
    )


def medical_record_from_dict(data: Dict) -> MedicalRecord:
    return MedicalRecord(
        firstName=data.get("firstName") or "",
        lastName=data.get("lastName") or "",
        birthdate=data.get("birthdate") or "",
        medications=list(data.get("medications") or []),
        allergies=list(data.get("allergies") or []),
    )


def to_dict(entity) -> Dict:
    return asdict(entity)

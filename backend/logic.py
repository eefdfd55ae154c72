# Derived views - joins across persons, fire stations and medical records
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Tuple

from config import BIRTHDATE_FORMAT, DEFAULT_CHILD_AGE_THRESHOLD
from models import MedicalRecord, Person
from repositories import FireStationRepository, MedicalRecordRepository, PersonRepository

LOGGER = logging.getLogger("safetynet.logic")


def calculate_age(birthdate: Optional[str], today: Optional[date] = None) -> int:
    """Full years between birthdate (MM/dd/yyyy) and today. Raises ValueError on blank, malformed or future dates."""
    if birthdate is None or not birthdate.strip():
        raise ValueError("birthdate is empty")
    born = datetime.strptime(birthdate.strip(), BIRTHDATE_FORMAT).date()
    today = today or date.today()
    if born > today:
        raise ValueError(f"birthdate {birthdate} is in the future")
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))


def is_child(age: int, threshold: int = DEFAULT_CHILD_AGE_THRESHOLD) -> bool:
    return age <= threshold


def _person_info(person: Person) -> Dict:
    return {
        "firstName": person.firstName,
        "lastName": person.lastName,
        "address": person.address,
        "phone": person.phone,
    }


def _record_and_age(
    person: Person, records: MedicalRecordRepository, today: Optional[date]
) -> Optional[Tuple[MedicalRecord, int]]:
    """The person's medical record and age, None (logged) when either is unavailable."""
    record = records.find_by_first_name_and_last_name(person.firstName, person.lastName)
    if record is None:
        LOGGER.warning("No medical record for %s %s, age unknown", person.firstName, person.lastName)
        return None
    try:
        return record, calculate_age(record.birthdate, today)
    except ValueError as exc:
        LOGGER.warning(
            "Cannot compute age for %s %s (birthdate %r): %s",
            person.firstName, person.lastName, record.birthdate, exc,
        )
        return None


def _age_of(person: Person, records: MedicalRecordRepository, today: Optional[date]) -> Optional[int]:
    resolved = _record_and_age(person, records, today)
    return resolved[1] if resolved else None


def station_coverage(
    station_number: int,
    persons: PersonRepository,
    stations: FireStationRepository,
    records: MedicalRecordRepository,
    threshold: int = DEFAULT_CHILD_AGE_THRESHOLD,
    today: Optional[date] = None,
) -> Optional[Dict]:
    """
    People living at the addresses a station covers, with adult/child counts.
    Residents whose age is unknown are listed but not counted.
    """
    addresses = stations.find_addresses_by_station_number(station_number)
    if not addresses:
        LOGGER.warning("No address covered by station %s", station_number)
        return None

    people: List[Dict] = []
    adult_count = 0
    child_count = 0
    for person in persons.find_by_address_in(addresses):
        people.append(_person_info(person))
        age = _age_of(person, records, today)
        if age is None:
            continue
        if is_child(age, threshold):
            child_count += 1
        else:
            adult_count += 1

    return {"people": people, "adultCount": adult_count, "childCount": child_count}


def children_at_address(
    address: str,
    persons: PersonRepository,
    records: MedicalRecordRepository,
    threshold: int = DEFAULT_CHILD_AGE_THRESHOLD,
    today: Optional[date] = None,
) -> Optional[Dict]:
    """Children at an address plus the other residents. None when there is no child."""
    children: List[Dict] = []
    family_members: List[Dict] = []
    for person in persons.find_by_address_in([address]):
        age = _age_of(person, records, today)
        if age is None:
            continue
        if is_child(age, threshold):
            children.append({"firstName": person.firstName, "lastName": person.lastName, "age": age})
        else:
            family_members.append(_person_info(person))

    if not children:
        LOGGER.warning("No child found at %s", address)
        return None
    return {"children": children, "familyMembers": family_members}


def phone_alert(
    station_number: int,
    persons: PersonRepository,
    stations: FireStationRepository,
) -> Optional[Dict]:
    """Phone numbers of everyone covered by a station (duplicates kept)."""
    addresses = stations.find_addresses_by_station_number(station_number)
    if not addresses:
        LOGGER.warning("No address covered by station %s", station_number)
        return None
    return {"phones": [p.phone for p in persons.find_by_address_in(addresses)]}


def _fire_persons(
    address: str,
    persons: PersonRepository,
    stations: FireStationRepository,
    records: MedicalRecordRepository,
    today: Optional[date],
) -> List[Dict]:
    station = stations.find_station_number_by_address(address)
    result: List[Dict] = []
    for person in persons.find_by_address_in([address]):
        resolved = _record_and_age(person, records, today)
        if resolved is None:
            continue
        record, age = resolved
        result.append({
            "lastName": person.lastName,
            "phone": person.phone,
            "fireStation": station,
            "age": age,
            "medications": list(record.medications),
            "allergies": list(record.allergies),
        })
    return result


def fire_report_for_address(
    address: str,
    persons: PersonRepository,
    stations: FireStationRepository,
    records: MedicalRecordRepository,
    today: Optional[date] = None,
) -> Optional[Dict]:
    """Residents of an address with their station number and medical details."""
    residents = _fire_persons(address, persons, stations, records, today)
    if not residents:
        LOGGER.warning("No resident found at %s", address)
        return None
    return {"persons": residents}


def flood_report(
    station_numbers: Iterable[str],
    persons: PersonRepository,
    stations: FireStationRepository,
    records: MedicalRecordRepository,
    today: Optional[date] = None,
) -> Dict:
    """
    Households grouped by address for each requested station.
    Non-numeric station numbers are skipped; stations and addresses with no
    resident are left out.
    """
    result: List[Dict] = []
    for raw in station_numbers:
        station_number = str(raw).strip()
        if not station_number.isdigit():
            LOGGER.warning("Skipping invalid station number %r", raw)
            continue
        households: List[Dict] = []
        for address in stations.find_addresses_by_station_number(int(station_number)):
            residents = _fire_persons(address, persons, stations, records, today)
            if residents:
                households.append({"address": address, "persons": residents})
        if households:
            result.append({"fireStation": station_number, "persons": households})
    return {"fireStationAddressPersonMedicalRecords": result}


def person_info_by_last_name(
    last_name: str,
    persons: PersonRepository,
    records: MedicalRecordRepository,
    today: Optional[date] = None,
) -> Optional[Dict]:
    """Address, age, e-mail and medical details of everyone with this last name."""
    info_list: List[Dict] = []
    for person in persons.find_by_last_name(last_name):
        resolved = _record_and_age(person, records, today)
        if resolved is None:
            continue
        record, age = resolved
        info_list.append({
            "address": person.address,
            "age": age,
            "email": person.email,
            "medications": list(record.medications),
            "allergies": list(record.allergies),
        })

    if not info_list:
        LOGGER.warning("No person found with last name %s", last_name)
        return None
    return {"lastName": last_name.strip(), "personInfoList": info_list}


def community_emails(city: str, persons: PersonRepository) -> Optional[Dict]:
    """Distinct e-mails of the city's residents, first-seen order."""
    emails: List[str] = []
    for person in persons.find_by_city(city):
        if person.email and person.email not in emails:
            emails.append(person.email)
    if not emails:
        LOGGER.warning("No e-mail found for city %s", city)
        return None
    return {"city": city.strip(), "emails": emails}

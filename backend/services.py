# CRUD rules for persons, fire stations and medical records
from __future__ import annotations

import logging
from typing import List

from errors import InvalidInputError, NotFoundError
from models import FireStation, MedicalRecord, Person, is_blank
from repositories import FireStationRepository, MedicalRecordRepository, PersonRepository

LOGGER = logging.getLogger("safetynet.services")


def _require_name(first_name, last_name, action: str) -> None:
    if is_blank(first_name) or is_blank(last_name):
        raise InvalidInputError(f"firstName and lastName are required to {action}")


# -------------------------- persons --------------------------
def list_persons(persons: PersonRepository) -> List[Person]:
    return persons.find_all()


def add_person(persons: PersonRepository, person: Person) -> Person:
    _require_name(person.firstName, person.lastName, "add a person")
    saved = persons.save(person, insert_only=True)
    LOGGER.info("Added person %s %s", saved.firstName, saved.lastName)
    return saved


def update_person(persons: PersonRepository, person: Person) -> Person:
    _require_name(person.firstName, person.lastName, "update a person")
    if not persons.exists_by_id(person.firstName, person.lastName):
        raise NotFoundError(f"Person {person.firstName} {person.lastName} not found")
    saved = persons.save(person)
    LOGGER.info("Updated person %s %s", saved.firstName, saved.lastName)
    return saved


def delete_person(persons: PersonRepository, first_name: str, last_name: str) -> None:
    _require_name(first_name, last_name, "delete a person")
    if not persons.delete_by_first_name_and_last_name(first_name, last_name):
        raise NotFoundError(f"Person {first_name} {last_name} not found")
    LOGGER.info("Deleted person %s %s", first_name, last_name)


# -------------------------- fire stations --------------------------
def _require_mapping(fire_station: FireStation, action: str) -> None:
    if is_blank(fire_station.address) or is_blank(fire_station.station):
        raise InvalidInputError(f"address and station are required to {action}")


def list_fire_stations(stations: FireStationRepository) -> List[FireStation]:
    return stations.find_all()


def add_fire_station(stations: FireStationRepository, fire_station: FireStation) -> FireStation:
    _require_mapping(fire_station, "add a fire station mapping")
    saved = stations.save(fire_station, insert_only=True)
    LOGGER.info("Mapped %s to station %s", saved.address, saved.station)
    return saved


def update_fire_station(stations: FireStationRepository, fire_station: FireStation) -> FireStation:
    _require_mapping(fire_station, "update a fire station mapping")
    if not stations.exists_by_address(fire_station.address):
        raise NotFoundError(f"No mapping for address {fire_station.address}")
    saved = stations.save(fire_station)
    LOGGER.info("Remapped %s to station %s", saved.address, saved.station)
    return saved


def delete_fire_station(stations: FireStationRepository, address: str) -> None:
    if is_blank(address):
        raise InvalidInputError("address is required to delete a fire station mapping")
    if not stations.delete_by_address(address):
        raise NotFoundError(f"No mapping for address {address}")
    LOGGER.info("Deleted mapping for %s", address)


# -------------------------- medical records --------------------------
def list_medical_records(records: MedicalRecordRepository) -> List[MedicalRecord]:
    return records.find_all()


def get_medical_record(records: MedicalRecordRepository, first_name: str, last_name: str) -> MedicalRecord:
    _require_name(first_name, last_name, "look up a medical record")
    record = records.find_by_first_name_and_last_name(first_name, last_name)
    if record is None:
        raise NotFoundError(f"No medical record for {first_name} {last_name}")
    return record


def add_medical_record(records: MedicalRecordRepository, record: MedicalRecord) -> MedicalRecord:
    _require_name(record.firstName, record.lastName, "add a medical record")
    saved = records.save(record, insert_only=True)
    LOGGER.info("Added medical record for %s %s", saved.firstName, saved.lastName)
    return saved


def update_medical_record(records: MedicalRecordRepository, record: MedicalRecord) -> MedicalRecord:
    """Replace birthdate, medications and allergies; the stored names are kept."""
    _require_name(record.firstName, record.lastName, "update a medical record")
    existing = records.find_by_first_name_and_last_name(record.firstName, record.lastName)
    if existing is None:
        raise NotFoundError(f"No medical record for {record.firstName} {record.lastName}")
    existing.birthdate = record.birthdate
    existing.medications = list(record.medications or [])
    existing.allergies = list(record.allergies or [])
    saved = records.save(existing)
    LOGGER.info("Updated medical record for %s %s", saved.firstName, saved.lastName)
    return saved


def delete_medical_record(records: MedicalRecordRepository, first_name: str, last_name: str) -> None:
    _require_name(first_name, last_name, "delete a medical record")
    if not records.delete_by_first_name_and_last_name(first_name, last_name):
        raise NotFoundError(f"No medical record for {first_name} {last_name}")
    LOGGER.info("Deleted medical record for %s %s", first_name, last_name)

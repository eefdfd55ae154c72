# Backend main entry point - SafetyNet alerts API
import logging
from typing import List, Optional, Union

from fastapi import FastAPI, Query, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

import logic
import services
from config import get_settings, is_demo_mode
from errors import STATUS_BY_KIND, InvalidInputError, NotFoundError, SafetyNetError
from log_config import configure_logging
from models import FireStation, MedicalRecord, Person, is_blank, to_dict
from repositories import FireStationRepository, MedicalRecordRepository, PersonRepository
from seed import seed_data, seed_document
from store import DataStore, get_store, set_store

LOGGER = logging.getLogger("safetynet.api")

settings = get_settings()
configure_logging(settings)

app = FastAPI(title="SafetyNet Alerts API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def open_data_store():
    """Load the backing document, creating it from the baseline dataset if needed."""
    current = get_settings()
    set_store(DataStore.open(current.data_file, fallback=seed_document()))


# Error mapping
@app.exception_handler(SafetyNetError)
async def safetynet_error_handler(request: Request, exc: SafetyNetError):
    status_code = STATUS_BY_KIND[exc.kind]
    LOGGER.warning("%s %s -> %d: %s", request.method, request.url.path, status_code, exc.message)
    return JSONResponse(status_code=status_code, content={"detail": exc.message, "kind": exc.kind.value})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    LOGGER.warning("%s %s -> 400: invalid request", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors()), "kind": "invalid_input"},
    )


@app.exception_handler(Exception)
async def unexpected_exception_handler(request: Request, exc: Exception):
    LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "kind": "internal"},
    )


# Request/Response models
class PersonModel(BaseModel):
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    zip: Optional[Union[int, str]] = None
    phone: Optional[str] = None
    email: Optional[str] = None

    def to_entity(self) -> Person:
        return Person(
            firstName=self.firstName,
            lastName=self.lastName,
            address=self.address or "",
            city=self.city or "",
            zip="" if self.zip is None else str(self.zip),
            phone=self.phone or "",
            email=self.email or "",
        )


class FireStationModel(BaseModel):
    address: Optional[str] = None
    station: Optional[Union[int, str]] = None

    def to_entity(self) -> FireStation:
        return FireStation(
            address=self.address,
            station=None if self.station is None else str(self.station),
        )


class MedicalRecordModel(BaseModel):
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    birthdate: Optional[str] = None
    medications: Optional[List[str]] = None
    allergies: Optional[List[str]] = None

    def to_entity(self) -> MedicalRecord:
        return MedicalRecord(
            firstName=self.firstName,
            lastName=self.lastName,
            birthdate=self.birthdate or "",
            medications=self.medications,
            allergies=self.allergies,
        )


def _persons() -> PersonRepository:
    return PersonRepository(get_store())


def _stations() -> FireStationRepository:
    return FireStationRepository(get_store())


def _records() -> MedicalRecordRepository:
    return MedicalRecordRepository(get_store())


def _require_param(value: str, name: str) -> str:
    if is_blank(value):
        raise InvalidInputError(f"Query parameter '{name}' must not be blank")
    return value


def _found(result, what: str):
    if result is None:
        raise NotFoundError(f"No data found for {what}")
    return result


@app.get("/")
def read_root():
    return {"message": "SafetyNet Alerts API"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}


# Alert endpoints
@app.get("/firestation")
def get_station_coverage(stationNumber: int):
    """People covered by a fire station, with adult and child counts"""
    LOGGER.info("GET /firestation stationNumber=%s", stationNumber)
    if stationNumber <= 0:
        raise InvalidInputError("stationNumber must be a positive integer")
    result = logic.station_coverage(
        stationNumber, _persons(), _stations(), _records(), get_settings().child_age_threshold
    )
    return _found(result, f"station {stationNumber}")


@app.get("/childAlert")
def get_child_alert(address: str):
    """Children living at an address and the other household members"""
    LOGGER.info("GET /childAlert address=%s", address)
    _require_param(address, "address")
    result = logic.children_at_address(
        address, _persons(), _records(), get_settings().child_age_threshold
    )
    return _found(result, f"address {address}")


@app.get("/phoneAlert")
def get_phone_alert(firestation: int):
    """Phone numbers of the residents covered by a station"""
    LOGGER.info("GET /phoneAlert firestation=%s", firestation)
    if firestation <= 0:
        raise InvalidInputError("firestation must be a positive integer")
    return _found(logic.phone_alert(firestation, _persons(), _stations()), f"station {firestation}")


@app.get("/fire")
def get_fire_report(address: str):
    """Residents of an address with their station number and medical details"""
    LOGGER.info("GET /fire address=%s", address)
    _require_param(address, "address")
    result = logic.fire_report_for_address(address, _persons(), _stations(), _records())
    return _found(result, f"address {address}")


@app.get("/flood/stations")
def get_flood_report(stations: List[str] = Query(...)):
    """Households grouped by address for each station. Accepts stations=1,2 or repeated params."""
    numbers = [part.strip() for raw in stations for part in raw.split(",") if part.strip()]
    LOGGER.info("GET /flood/stations stations=%s", numbers)
    if not numbers:
        raise InvalidInputError("At least one station number is required")
    invalid = [n for n in numbers if not n.isdigit()]
    if invalid:
        raise InvalidInputError(f"Invalid station numbers: {', '.join(invalid)}")
    return logic.flood_report(numbers, _persons(), _stations(), _records())


@app.get("/personInfolastName")
def get_person_info(lastName: str):
    """Address, age, e-mail and medical details for a family name"""
    LOGGER.info("GET /personInfolastName lastName=%s", lastName)
    _require_param(lastName, "lastName")
    result = logic.person_info_by_last_name(lastName, _persons(), _records())
    return _found(result, f"last name {lastName}")


@app.get("/communityEmail")
def get_community_email(city: str):
    """E-mail addresses of a city's residents"""
    LOGGER.info("GET /communityEmail city=%s", city)
    _require_param(city, "city")
    return _found(logic.community_emails(city, _persons()), f"city {city}")


# Person CRUD
@app.get("/person", response_model=List[PersonModel])
def get_persons():
    persons = services.list_persons(_persons())
    if not persons:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return [to_dict(p) for p in persons]


@app.post("/person", response_model=PersonModel, status_code=status.HTTP_201_CREATED)
def add_person(person: PersonModel):
    return to_dict(services.add_person(_persons(), person.to_entity()))


@app.put("/person", response_model=PersonModel)
def update_person(person: PersonModel):
    return to_dict(services.update_person(_persons(), person.to_entity()))


@app.delete("/person", status_code=status.HTTP_204_NO_CONTENT)
def delete_person(firstName: str, lastName: str):
    services.delete_person(_persons(), firstName, lastName)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Fire station CRUD
@app.get("/firestation/all", response_model=List[FireStationModel])
def get_fire_stations():
    return [to_dict(fs) for fs in services.list_fire_stations(_stations())]


@app.post("/firestation", response_model=FireStationModel, status_code=status.HTTP_201_CREATED)
def add_fire_station(fire_station: FireStationModel):
    return to_dict(services.add_fire_station(_stations(), fire_station.to_entity()))


@app.put("/firestation", response_model=FireStationModel)
def update_fire_station(fire_station: FireStationModel):
    return to_dict(services.update_fire_station(_stations(), fire_station.to_entity()))


@app.delete("/firestation", status_code=status.HTTP_204_NO_CONTENT)
def delete_fire_station(address: str):
    services.delete_fire_station(_stations(), address)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Medical record CRUD
@app.get("/medicalRecord/all", response_model=List[MedicalRecordModel])
def get_medical_records():
    return [to_dict(r) for r in services.list_medical_records(_records())]


@app.get("/medicalRecord", response_model=MedicalRecordModel)
def get_medical_record(firstName: str, lastName: str):
    return to_dict(services.get_medical_record(_records(), firstName, lastName))


@app.post("/medicalRecord", response_model=MedicalRecordModel, status_code=status.HTTP_201_CREATED)
def add_medical_record(record: MedicalRecordModel):
    return to_dict(services.add_medical_record(_records(), record.to_entity()))


@app.put("/medicalRecord", response_model=MedicalRecordModel)
def update_medical_record(record: MedicalRecordModel):
    return to_dict(services.update_medical_record(_records(), record.to_entity()))


@app.delete("/medicalRecord", status_code=status.HTTP_204_NO_CONTENT)
def delete_medical_record(firstName: str, lastName: str):
    services.delete_medical_record(_records(), firstName, lastName)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get("/demo/status")
def demo_status():
    """Returns whether demo mode is enabled."""
    return {"demoMode": is_demo_mode()}


@app.post("/demo/reset")
def demo_reset():
    """
    Restore the baseline dataset and rewrite the data file.
    Only available when DEMO_MODE=true.
    """
    if not is_demo_mode():
        raise NotFoundError("Demo reset not available")
    seed_data()
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)

from __future__ import annotations
import logging, time
from fastapi import Depends, FastAPI, HTTPException, Query

from macstore.address import parse_mac
from macstore.database import get_database
from macstore.models import MacRecord
from macstore.store import MISSING, MacRecordStore

logger = logging.getLogger(__name__)

app = FastAPI(title="macstore API", version="0.1.0")


def get_store() -> MacRecordStore:
    return MacRecordStore(get_database().engine)


def _mac_or_400(address: str) -> int:
    try:
        return parse_mac(address)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid MAC address: {exc}")


def _not_found(address: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"No record for {address}")


@app.get("/health")
async def health():
    return {"status": "ok", "time": time.time()}


@app.get("/macs")
def list_macs(
    active: bool = Query(False, description="Only return active addresses"),
    store: MacRecordStore = Depends(get_store),
):
    records = store.fetch_active() if active else store.fetch_all()
    return [record.to_dict() for record in records]


@app.get("/macs/{address}")
def show_mac(address: str, store: MacRecordStore = Depends(get_store)):
    record = store.fetch_one(_mac_or_400(address))
    if record is None:
        raise _not_found(address)
    return record.to_dict()


@app.post("/macs")
def create_mac(
    address: str = Query(..., description="MAC address, e.g. AA:BB:CC:DD:EE:FF"),
    active: bool = Query(True),
    store: MacRecordStore = Depends(get_store),
):
    mac = _mac_or_400(address)
    row_id = store.create(mac, active)
    if row_id == MISSING:
        raise HTTPException(status_code=409, detail=f"Could not create {address}")
    # A fresh row has zeroed counters, so no read-back is needed
    return {"id": row_id, **MacRecord(mac=mac, active=active).to_dict()}


@app.put("/macs/{address}/active")
def set_active(
    address: str,
    active: bool = Query(...),
    store: MacRecordStore = Depends(get_store),
):
    if not store.set_active(_mac_or_400(address), active):
        raise _not_found(address)
    return {"address": address, "active": active}


@app.post("/macs/deactivate")
def deactivate_all(store: MacRecordStore = Depends(get_store)):
    return {"changed": store.deactivate_all()}


@app.post("/macs/{address}/attempts")
def add_attempts(
    address: str,
    delta: int = Query(1, ge=0),
    store: MacRecordStore = Depends(get_store),
):
    mac = _mac_or_400(address)
    if not store.increment_attempts(mac, delta):
        raise _not_found(address)
    return {"address": address, "attempts": store.get_attempts(mac)}


@app.post("/macs/{address}/successful")
def add_successful(
    address: str,
    delta: int = Query(1, ge=0),
    store: MacRecordStore = Depends(get_store),
):
    mac = _mac_or_400(address)
    if not store.increment_successful(mac, delta):
        raise _not_found(address)
    return {"address": address, "successful": store.get_successful(mac)}


@app.delete("/macs/{address}")
def delete_mac(address: str, store: MacRecordStore = Depends(get_store)):
    if not store.delete(_mac_or_400(address)):
        raise _not_found(address)
    logger.info("Deleted %s via API", address)
    return {"status": "deleted", "address": address}

"""Simple smoke test to ensure the package and models import correctly."""
from macstore import MacRecordStore, format_mac, parse_mac
from macstore.models import MacRecord, MacRow, TABLE_MACS


def test_imports():
    record = MacRecord(mac=0x001122334455, attempts=2, successful=1, active=True)
    assert record.address == "00:11:22:33:44:55"
    assert record.to_dict()["attempts"] == 2
    assert MacRow.__tablename__ == TABLE_MACS == "macs"
    assert {column.name for column in MacRow.__table__.columns} == {
        "_id", "mac", "attempts", "successful", "active",
    }
    assert callable(MacRecordStore.fetch_all)
    assert parse_mac(format_mac(record.mac)) == record.mac


if __name__ == "__main__":
    test_imports()
    print("models import smoke test: OK")

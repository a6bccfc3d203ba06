# tests/test_record_store.py

import json
from dataclasses import replace

from core.config import DEFAULT_STORAGE_KEY as STORAGE_KEY
from core.response import ErrorCode
from models.record_store import SEED_STUDENTS, RecordStore
from models.student import StudentForm
from storage.blob_store import InMemoryBlobStore, JsonFileBlobStore


class UnwritableBlobStore(InMemoryBlobStore):
    def set(self, key: str, value: str) -> None:
        raise OSError("disk full")


class UnreadableBlobStore(InMemoryBlobStore):
    def get(self, key: str) -> str | None:
        raise OSError("permission denied")


def seed_summary(records):
    return [
        {k: v for k, v in record.to_dict().items() if k != "id"} for record in records
    ]


def stored_payload(blob_store):
    return json.loads(blob_store.get(STORAGE_KEY))


# === load ===


def test_load_existing_collection(record_store):
    records = record_store.list_records()

    assert [r.id for r in records] == ["s001", "s002"]
    assert records[1].marks == 88.5


def test_load_empty_store_uses_seed(memory_blob_store):
    store = RecordStore(memory_blob_store, STORAGE_KEY)
    records = store.load()

    assert seed_summary(records) == list(SEED_STUDENTS)
    assert len({r.id for r in records}) == 2


def test_load_seed_is_persisted(memory_blob_store):
    store = RecordStore(memory_blob_store, STORAGE_KEY)
    records = store.load()

    assert [d["id"] for d in stored_payload(memory_blob_store)] == [r.id for r in records]


def test_load_seed_ids_stable_across_reloads(memory_blob_store):
    first = RecordStore(memory_blob_store, STORAGE_KEY).load()
    second = RecordStore(memory_blob_store, STORAGE_KEY).load()

    assert first == second


def test_load_malformed_json_uses_seed():
    blob_store = InMemoryBlobStore({STORAGE_KEY: "{not json"})
    records = RecordStore(blob_store, STORAGE_KEY).load()

    assert seed_summary(records) == list(SEED_STUDENTS)


def test_load_deeply_nested_json_uses_seed():
    depth = 200_000
    blob_store = InMemoryBlobStore({STORAGE_KEY: "[" * depth + "]" * depth})

    records = RecordStore(blob_store, STORAGE_KEY).load()

    assert seed_summary(records) == list(SEED_STUDENTS)
    assert len(stored_payload(blob_store)) == 2


def test_load_non_list_payload_uses_seed():
    blob_store = InMemoryBlobStore({STORAGE_KEY: json.dumps({"students": []})})
    records = RecordStore(blob_store, STORAGE_KEY).load()

    assert seed_summary(records) == list(SEED_STUDENTS)


def test_load_malformed_record_uses_seed(sample_record):
    broken = sample_record.to_dict()
    del broken["name"]
    blob_store = InMemoryBlobStore({STORAGE_KEY: json.dumps([broken])})

    records = RecordStore(blob_store, STORAGE_KEY).load()

    assert seed_summary(records) == list(SEED_STUDENTS)


def test_load_duplicate_ids_uses_seed(sample_record):
    data = sample_record.to_dict()
    blob_store = InMemoryBlobStore({STORAGE_KEY: json.dumps([data, data])})

    records = RecordStore(blob_store, STORAGE_KEY).load()

    assert seed_summary(records) == list(SEED_STUDENTS)


def test_load_empty_list_stays_empty():
    blob_store = InMemoryBlobStore({STORAGE_KEY: "[]"})

    assert RecordStore(blob_store, STORAGE_KEY).load() == ()


def test_load_unreadable_store_uses_seed():
    records = RecordStore(UnreadableBlobStore(), STORAGE_KEY).load()

    assert seed_summary(records) == list(SEED_STUDENTS)


def test_load_unwritable_store_still_returns_seed():
    records = RecordStore(UnwritableBlobStore(), STORAGE_KEY).load()

    assert len(records) == 2


# === create ===


def test_create_appends_record(record_store, sample_form):
    existing_ids = {r.id for r in record_store.list_records()}

    response = record_store.create(sample_form)

    assert response.success
    record = response.data["record"]
    assert response.data["persisted"]
    assert record.id not in existing_ids
    assert len(record_store.list_records()) == 3
    assert record_store.list_records()[-1] is record


def test_create_coerces_numbers(record_store, sample_form):
    record = record_store.create(sample_form).data["record"]

    assert record.name == "A"
    assert record.reg_no == "R1"
    assert record.age == 20
    assert isinstance(record.age, int)
    assert record.marks == 90
    assert isinstance(record.marks, int)
    assert record.dob == "2000-01-01"


def test_create_persists_collection(record_store, seeded_blob_store, sample_form):
    record = record_store.create(sample_form).data["record"]

    payload = stored_payload(seeded_blob_store)

    assert len(payload) == 3
    assert payload[-1] == record.to_dict()
    assert payload[-1]["age"] == 20
    assert payload[-1]["marks"] == 90


def test_create_trims_text_fields(record_store, sample_form):
    record = record_store.create(replace(sample_form, name="  A  ")).data["record"]

    assert record.name == "A"


def test_create_invalid_age_does_not_mutate(record_store, seeded_blob_store, sample_form):
    before = seeded_blob_store.get(STORAGE_KEY)

    response = record_store.create(replace(sample_form, age="-5"))

    assert not response.success
    assert response.error is ErrorCode.VALIDATION_FAILED
    assert response.data["errors"] == {"age": "Enter a valid age"}
    assert len(record_store) == 2
    assert seeded_blob_store.get(STORAGE_KEY) == before


def test_create_with_failed_save_keeps_record(sample_form):
    store = RecordStore(UnwritableBlobStore({STORAGE_KEY: "[]"}), STORAGE_KEY)
    store.load()

    response = store.create(sample_form)

    assert response.success
    assert not response.data["persisted"]
    assert len(store) == 1


# === update ===


def test_update_replaces_fields_in_place(record_store, sample_form):
    response = record_store.update("s001", sample_form)

    assert response.success
    records = record_store.list_records()
    assert [r.id for r in records] == ["s001", "s002"]
    assert records[0].name == "A"
    assert records[0].age == 20
    assert records[1].name == "Alan Turing"


def test_update_persists_collection(record_store, seeded_blob_store, sample_form):
    record_store.update("s002", sample_form)

    payload = stored_payload(seeded_blob_store)

    assert [d["id"] for d in payload] == ["s001", "s002"]
    assert payload[1]["regNo"] == "R1"
    assert payload[0]["regNo"] == "REG0001"


def test_update_unknown_id_is_not_found(record_store, seeded_blob_store, sample_form):
    before = seeded_blob_store.get(STORAGE_KEY)

    response = record_store.update("missing", sample_form)

    assert not response.success
    assert response.error is ErrorCode.NOT_FOUND
    assert response.status_code == 404
    assert seeded_blob_store.get(STORAGE_KEY) == before


def test_update_invalid_marks_does_not_mutate(record_store, sample_form):
    response = record_store.update("s001", replace(sample_form, marks="101"))

    assert not response.success
    assert response.error is ErrorCode.VALIDATION_FAILED
    assert response.data["errors"] == {"marks": "0 - 100 only"}
    assert record_store.list_records()[0].name == "Grace Hopper"


# === delete ===


def test_delete_removes_exactly_one(record_store, seeded_blob_store):
    response = record_store.delete("s001")

    assert response.success
    assert response.data["removed"]
    assert [r.id for r in record_store.list_records()] == ["s002"]
    assert [d["id"] for d in stored_payload(seeded_blob_store)] == ["s002"]


def test_delete_unknown_id_is_noop(record_store, seeded_blob_store):
    before = seeded_blob_store.get(STORAGE_KEY)

    response = record_store.delete("missing")

    assert response.success
    assert not response.data["removed"]
    assert len(record_store) == 2
    assert seeded_blob_store.get(STORAGE_KEY) == before


def test_delete_twice_is_idempotent(record_store):
    record_store.delete("s001")
    response = record_store.delete("s001")

    assert response.success
    assert not response.data["removed"]
    assert len(record_store) == 1


# === list and lookup ===


def test_list_records_is_read_only_view(record_store, sample_form):
    records = record_store.list_records()

    assert isinstance(records, tuple)

    record_store.create(sample_form)

    assert len(records) == 2


def test_find_record_by_id(record_store):
    response = record_store.find_record_by_id("s002")

    assert response.success
    assert response.data["record"].name == "Alan Turing"
    assert "s002" in record_store


def test_find_record_by_unknown_id(record_store):
    response = record_store.find_record_by_id("missing")

    assert not response.success
    assert response.error is ErrorCode.NOT_FOUND


# === persistence round trip ===


def test_save_and_reload_round_trip(record_store, seeded_blob_store, sample_form):
    record_store.create(sample_form)
    record_store.update("s002", replace(sample_form, name="B", marks="42.5"))
    record_store.save()

    reloaded = RecordStore(seeded_blob_store, STORAGE_KEY).load()

    assert reloaded == record_store.list_records()
    assert reloaded[1].marks == 42.5


def test_save_failure_reports_storage_error():
    store = RecordStore(UnwritableBlobStore(), STORAGE_KEY)

    response = store.save()

    assert not response.success
    assert response.error is ErrorCode.STORAGE_ERROR


def test_validate_delegates_to_form_rules(record_store):
    result = record_store.validate(StudentForm(name="A"))

    assert "name" not in result.errors
    assert result.errors["reg_no"] == "Required"


def test_save_invalid_key_reports_storage_error(tmp_path):
    store = RecordStore(JsonFileBlobStore(str(tmp_path)), "student records")

    response = store.save()

    assert not response.success
    assert response.error is ErrorCode.STORAGE_ERROR
    assert list(tmp_path.iterdir()) == []


def test_file_store_survives_restart(tmp_path, sample_form):
    store = RecordStore(JsonFileBlobStore(str(tmp_path)), STORAGE_KEY)
    store.load()
    seed_ids = [r.id for r in store.list_records()]

    created = store.create(sample_form).data["record"]
    store.update(seed_ids[0], replace(sample_form, name="Zoe", reg_no="R9"))
    store.delete(seed_ids[1])

    reopened = RecordStore(JsonFileBlobStore(str(tmp_path)), STORAGE_KEY)
    records = reopened.load()

    assert records == store.list_records()
    assert [r.id for r in records] == [seed_ids[0], created.id]
    assert records[0].name == "Zoe"
    assert (tmp_path / f"{STORAGE_KEY}.json").exists()

"""Tests for the upload ingest pipeline."""

import asyncio

import pytest

from family_memories.services.errors import NotFound, UpstreamFailed, ValidationFailed
from family_memories.services.uploads import MAX_FILE_BYTES
from tests.conftest import image


def test_upload_memories_returns_assets_in_input_order(
    upload_service, media_store
) -> None:
    media_store.upload_delays = {"a.jpg": 0.03, "b.jpg": 0.0, "c.jpg": 0.01}
    files = [image("a.jpg"), image("b.jpg"), image("c.jpg")]

    result = asyncio.run(
        upload_service.upload_memories(files, year="2-years", category="photos")
    )

    assert [asset.id.split("/")[-1].split("-")[0] for asset in result.assets] == [
        "a",
        "b",
        "c",
    ]
    assert all(asset.id and asset.url for asset in result.assets)
    assert result.folder == "memories/2-years/photos"
    assert result.message == "3 images uploaded successfully"


def test_upload_memories_append_message(upload_service) -> None:
    result = asyncio.run(
        upload_service.upload_memories(
            [image()], year="1-year", category="school-work", mode="append"
        )
    )

    assert result.message == "1 images added to existing album"


@pytest.mark.parametrize(
    ("files", "year", "category", "message"),
    [
        ([], "1-year", "photos", "No images provided"),
        ([image()], None, "photos", "Year is required"),
        ([image()], "1-year", None, "Category is required"),
    ],
)
def test_upload_memories_rejects_missing_input(
    upload_service, media_store, files, year, category, message
) -> None:
    with pytest.raises(ValidationFailed) as exc_info:
        asyncio.run(upload_service.upload_memories(files, year, category))

    assert exc_info.value.message == message
    assert media_store.calls == []


def test_upload_memories_rejects_unknown_category(upload_service) -> None:
    with pytest.raises(ValidationFailed, match="Invalid category"):
        asyncio.run(upload_service.upload_memories([image()], "1-year", "videos"))


def test_batch_over_cap_is_rejected_before_transfer(
    upload_service, media_store
) -> None:
    files = [image(f"{index}.jpg") for index in range(11)]

    with pytest.raises(ValidationFailed):
        asyncio.run(upload_service.upload_memories(files, "1-year", "photos"))

    assert media_store.calls == []


def test_travel_batch_cap_is_twenty(upload_service, media_store) -> None:
    files = [image(f"{index}.jpg") for index in range(21)]

    with pytest.raises(ValidationFailed):
        asyncio.run(upload_service.create_travel(files, "Trip", "Lisbon"))

    assert media_store.calls == []


def test_oversized_file_is_rejected_before_transfer(
    upload_service, media_store
) -> None:
    files = [image("small.jpg"), image("huge.jpg", size=MAX_FILE_BYTES + 1)]

    with pytest.raises(ValidationFailed, match="File too large"):
        asyncio.run(upload_service.upload_memories(files, "1-year", "photos"))

    assert media_store.calls == []


def test_non_image_is_rejected(upload_service, media_store) -> None:
    files = [image("notes.pdf", content_type="application/pdf")]

    with pytest.raises(ValidationFailed, match="Only image files"):
        asyncio.run(upload_service.upload_memories(files, "1-year", "photos"))

    assert media_store.calls == []


def test_failed_transfer_aborts_batch_and_removes_stored_files(
    upload_service, media_store
) -> None:
    media_store.failing_uploads = {"bad.jpg"}
    media_store.upload_delays = {"good.jpg": 0.0, "bad.jpg": 0.02}

    with pytest.raises(UpstreamFailed) as exc_info:
        asyncio.run(
            upload_service.upload_memories(
                [image("good.jpg"), image("bad.jpg")], "1-year", "photos"
            )
        )

    assert exc_info.value.message == "Failed to upload images"
    assert media_store.folders["memories/1-year/photos"] == []
    assert len(media_store.remote_calls("destroy")) == 1


def test_create_travel_uses_slug_and_records_marker(
    upload_service, marker_repository, geocoder
) -> None:
    result = asyncio.run(
        upload_service.create_travel(
            [image()], "Summer Trip", "Rio de Janeiro", date="2024-01-10"
        )
    )

    assert result.folder == "travels/summer-trip"
    assert result.message == 'Album "Summer Trip" created with 1 images'
    assert result.marker is not None
    assert result.marker.coordinates == (-22.9068, -43.1729)
    assert geocoder.queries == ["Rio de Janeiro"]
    assert "summer-trip" in marker_repository.markers


def test_create_travel_prefers_supplied_coordinates(upload_service, geocoder) -> None:
    result = asyncio.run(
        upload_service.create_travel(
            [image()], "Ski Week", "Bariloche", coordinates=(-41.1, -71.3)
        )
    )

    assert result.marker is not None
    assert result.marker.coordinates == (-41.1, -71.3)
    assert geocoder.queries == []


def test_create_travel_survives_geocoder_failure(upload_service, geocoder) -> None:
    geocoder.fail = True

    result = asyncio.run(upload_service.create_travel([image()], "Trip", "Nowhere"))

    assert len(result.assets) == 1
    assert result.marker is not None
    assert result.marker.coordinates is None


def test_create_travel_survives_marker_store_failure(
    upload_service, marker_repository
) -> None:
    marker_repository.fail_writes = True

    result = asyncio.run(upload_service.create_travel([image()], "Trip", "Porto"))

    assert len(result.assets) == 1
    assert result.marker is None


def test_create_travel_requires_name_and_location(upload_service, media_store) -> None:
    with pytest.raises(ValidationFailed, match="Travel name and location"):
        asyncio.run(upload_service.create_travel([image()], "Trip", None))

    assert media_store.calls == []


def test_create_travel_rejects_append_mode(upload_service) -> None:
    with pytest.raises(ValidationFailed):
        asyncio.run(
            upload_service.create_travel([image()], "Trip", "Porto", mode="append")
        )


def test_append_travel_reuses_folder_without_marker(
    upload_service, media_store, marker_repository, geocoder
) -> None:
    asyncio.run(upload_service.create_travel([image("one.jpg")], "Summer Trip", "Rio"))
    marker_before = marker_repository.markers["summer-trip"]
    geocoder.queries.clear()

    result = asyncio.run(
        upload_service.append_travel("summer-trip", [image("two.jpg")])
    )

    assert result.folder == "travels/summer-trip"
    assert result.marker_attempted is False
    assert geocoder.queries == []
    assert marker_repository.markers["summer-trip"] is marker_before
    assert len(media_store.folders["travels/summer-trip"]) == 2


def test_delete_image_twice_reports_not_found(upload_service) -> None:
    result = asyncio.run(
        upload_service.upload_memories([image()], "1-year", "photos")
    )
    public_id = result.assets[0].id

    assert asyncio.run(upload_service.delete_image(public_id)) == "ok"
    with pytest.raises(NotFound):
        asyncio.run(upload_service.delete_image(public_id))


def test_description_travels_with_the_result(upload_service) -> None:
    memories = asyncio.run(
        upload_service.upload_memories(
            [image()], "1-year", "photos", description="First steps"
        )
    )
    travel = asyncio.run(
        upload_service.create_travel(
            [image()], "Trip", "Porto", description="Harbour walk"
        )
    )
    appended = asyncio.run(
        upload_service.append_travel("trip", [image()], description="Day two")
    )

    assert memories.description == "First steps"
    assert travel.description == "Harbour walk"
    assert appended.description == "Day two"


def test_check_file_rejects_declared_size_over_limit(upload_service) -> None:
    with pytest.raises(ValidationFailed, match="File too large"):
        upload_service.check_file("big.jpg", "image/jpeg", MAX_FILE_BYTES + 1)

    upload_service.check_file("unknown.jpg", "image/jpeg", None)

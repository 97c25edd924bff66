"""Container REST endpoint tests."""

from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from container_tracker.models import Container, ContainerHistory
from container_tracker.services import container_service


def _create(client: TestClient, headers: dict[str, str], **overrides):
    payload = {"container_number": "C100", "container_type_id": 1, "source": "CDC", "status": "planned"}
    payload.update(overrides)
    return client.post("/api/containers", json=payload, headers=headers)


def test_container_types_are_seeded(client: TestClient) -> None:
    response = client.get("/api/container-types")

    assert response.status_code == 200
    assert [row["name"] for row in response.json()] == ["Mattress", "Sofa", "Dining", "Furniture"]


def test_create_update_scenario(client: TestClient, operator_headers: dict[str, str]) -> None:

    created = _create(client, operator_headers)
    assert created.status_code == 201
    container_id = created.json()["id"]

    first = client.put(f"/api/containers/{container_id}", json={"status": "in_transit"}, headers=operator_headers)
    assert first.status_code == 200
    assert first.json() == {"message": "Container updated successfully", "changed": True}

    second = client.put(f"/api/containers/{container_id}", json={"status": "in_transit"}, headers=operator_headers)
    assert second.status_code == 200
    assert second.json() == {"message": "No changes detected", "changed": False}

    detail = client.get(f"/api/containers/{container_id}")
    assert detail.status_code == 200
    body = detail.json()
    assert body["status"] == "in_transit"
    assert body["container_type_name"] == "Mattress"
    assert body["created_by_name"] == "Olivia Operator"
    assert body["updated_by_name"] == "Olivia Operator"
    assert [(row["field_name"], row["old_value"], row["new_value"]) for row in body["history"]] == [
        ("status", "planned", "in_transit")
    ]
    assert body["history"][0]["changed_by_name"] == "Olivia Operator"


def test_history_is_newest_first(client: TestClient, operator_headers: dict[str, str]) -> None:
    container_id = _create(client, operator_headers).json()["id"]
    client.put(f"/api/containers/{container_id}", json={"status": "in_transit"}, headers=operator_headers)
    client.put(f"/api/containers/{container_id}", json={"status": "arrived"}, headers=operator_headers)

    history = client.get(f"/api/containers/{container_id}").json()["history"]

    assert [row["new_value"] for row in history] == ["arrived", "in_transit"]


def test_create_requires_identity(client: TestClient, session_local: sessionmaker) -> None:
    response = _create(client, {})

    assert response.status_code == 401
    with session_local() as db:
        assert db.scalar(select(func.count(Container.id))) == 0


def test_invalid_token_is_rejected(client: TestClient) -> None:
    response = _create(client, {"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_duplicate_container_number_is_rejected(client: TestClient, operator_headers: dict[str, str]) -> None:
    assert _create(client, operator_headers, container_number="DUP").status_code == 201

    response = _create(client, operator_headers, container_number="DUP", container_type_id=2)

    assert response.status_code == 400
    assert response.json()["detail"] == "Container number already exists"


def test_create_validation_errors_carry_field_detail(client: TestClient, operator_headers: dict[str, str]) -> None:

    bad_status = _create(client, operator_headers, status="lost")
    bad_date = _create(client, operator_headers, planned_date="2026-02-30")
    missing = client.post("/api/containers", json={"container_type_id": 1}, headers=operator_headers)

    assert bad_status.status_code == 400
    assert bad_status.json()["errors"][0]["field"] == "status"
    assert bad_date.status_code == 400
    assert bad_date.json()["errors"][0]["field"] == "planned_date"
    assert missing.status_code == 400
    assert {error["field"] for error in missing.json()["errors"]} == {"container_number", "source"}


def test_update_rejects_null_status(client: TestClient, operator_headers: dict[str, str]) -> None:
    container_id = _create(client, operator_headers).json()["id"]

    response = client.put(f"/api/containers/{container_id}", json={"status": None}, headers=operator_headers)

    assert response.status_code == 400
    assert [error["field"] for error in response.json()["errors"]] == ["status"]


def test_update_and_delete_missing_container(client: TestClient, operator_headers: dict[str, str]) -> None:
    assert client.put("/api/containers/9999", json={"status": "arrived"}, headers=operator_headers).status_code == 404
    assert client.delete("/api/containers/9999", headers=operator_headers).status_code == 404
    assert client.get("/api/containers/9999").status_code == 404


def test_source_only_update_changes_nothing(client: TestClient, operator_headers: dict[str, str]) -> None:
    container_id = _create(client, operator_headers).json()["id"]

    response = client.put(f"/api/containers/{container_id}", json={"source": "Dammam Port"}, headers=operator_headers)

    assert response.json()["changed"] is False
    assert client.get(f"/api/containers/{container_id}").json()["source"] == "CDC"


def test_null_or_blank_source_only_update_changes_nothing(
    client: TestClient, operator_headers: dict[str, str]
) -> None:
    container_id = _create(client, operator_headers).json()["id"]

    for body in ({"source": None}, {"source": ""}):
        response = client.put(f"/api/containers/{container_id}", json=body, headers=operator_headers)
        assert response.status_code == 200
        assert response.json() == {"message": "No changes detected", "changed": False}

    assert client.get(f"/api/containers/{container_id}").json()["source"] == "CDC"


def test_storage_failure_returns_opaque_error(
    client: TestClient, operator_headers: dict[str, str], session_local: sessionmaker, monkeypatch
) -> None:
    container_id = _create(client, operator_headers).json()["id"]

    def broken_record(*args, **kwargs):
        raise OperationalError("INSERT INTO container_history", {}, Exception("disk I/O error"))

    monkeypatch.setattr(container_service, "record_changes", broken_record)

    response = client.put(f"/api/containers/{container_id}", json={"status": "arrived"}, headers=operator_headers)

    assert response.status_code == 500
    assert response.json() == {"detail": "Something went wrong"}
    with session_local() as db:
        assert db.get(Container, container_id).status == "planned"


def test_concurrent_modification_returns_conflict(
    client: TestClient, operator_headers: dict[str, str], session_local: sessionmaker, monkeypatch
) -> None:
    container_id = _create(client, operator_headers).json()["id"]

    def stale_record(*args, **kwargs):
        raise StaleDataError("UPDATE statement on table 'containers' expected to update 1 row(s); 0 were matched.")

    monkeypatch.setattr(container_service, "record_changes", stale_record)

    response = client.put(f"/api/containers/{container_id}", json={"status": "arrived"}, headers=operator_headers)

    assert response.status_code == 409
    assert response.json() == {"detail": "Container was modified concurrently, please retry"}
    with session_local() as db:
        assert db.get(Container, container_id).status == "planned"
        history = db.scalar(
            select(func.count(ContainerHistory.id)).where(ContainerHistory.container_id == container_id)
        )
        assert history == 0


def test_delete_cascades_history(
    client: TestClient, operator_headers: dict[str, str], session_local: sessionmaker
) -> None:
    container_id = _create(client, operator_headers).json()["id"]
    client.put(f"/api/containers/{container_id}", json={"status": "departed"}, headers=operator_headers)

    response = client.delete(f"/api/containers/{container_id}", headers=operator_headers)

    assert response.status_code == 200
    assert response.json() == {"message": "Container deleted successfully"}
    with session_local() as db:
        assert db.get(Container, container_id) is None
        remaining = db.scalar(
            select(func.count(ContainerHistory.id)).where(ContainerHistory.container_id == container_id)
        )
        assert remaining == 0


def test_list_filters(client: TestClient, operator_headers: dict[str, str]) -> None:
    _create(client, operator_headers, container_number="A", source="CDC", expected_arrival_date="2026-10-01")
    _create(
        client,
        operator_headers,
        container_number="B",
        source="Jeddah Port",
        status="in_transit",
        container_type_id=2,
        expected_arrival_date="2026-10-10",
    )
    _create(client, operator_headers, container_number="C", source="CDC", expected_arrival_date="2026-10-20")

    def numbers(**params) -> list[str]:
        response = client.get("/api/containers", params=params)
        assert response.status_code == 200
        return [row["container_number"] for row in response.json()]

    assert numbers() == ["C", "B", "A"]
    assert numbers(status="in_transit") == ["B"]
    assert numbers(source="CDC") == ["C", "A"]
    assert numbers(container_type=2) == ["B"]
    assert numbers(date_from="2026-10-05", date_to="2026-10-20") == ["C", "B"]
    assert numbers(limit=1) == ["C"]
    assert numbers(status="lost") == []


def test_stats_overview_shape(client: TestClient, operator_headers: dict[str, str]) -> None:
    _create(client, operator_headers, container_number="A", expected_arrival_date="2999-01-01")
    _create(client, operator_headers, container_number="B", status="arrived")

    response = client.get("/api/containers/stats/overview")

    assert response.status_code == 200
    body = response.json()
    assert {row["status"]: row["count"] for row in body["statusBreakdown"]} == {"planned": 1, "arrived": 1}
    assert body["sourceBreakdown"] == [{"source": "CDC", "count": 2}]
    assert body["typeBreakdown"] == [{"type": "Mattress", "count": 2}]
    assert body["upcomingContainers"] == 1

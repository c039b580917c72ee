"""Tests for the two PDF export endpoints.

The official-form export fills the development template built in
conftest; the custom report goes through the recording converter.
"""
from __future__ import annotations

import io
from uuid import uuid4

import pytest
from pypdf import PdfReader

from basel_compliance.pdf.errors import RenderError

EXPORTS = ("generate-pdf", "generate-custom-pdf")


def test_official_form_export(client, alice, notification_id):
    client.post(f"/api/notifications/{notification_id}/load-test-data", headers=alice)

    response = client.get(f"/api/notifications/{notification_id}/generate-pdf", headers=alice)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == (
        f'attachment; filename="Basel_Notification_{notification_id}.pdf"'
    )
    fields = PdfReader(io.BytesIO(response.content)).get_fields()
    assert fields["1_exporter_notifier_name"]["/V"] == "Northern Battery Recycling Inc."
    assert fields["4_total_intended_shipments_count"]["/V"] == "24"
    assert fields["8_intended_carrier_means_road"]["/V"] == "/Yes"
    assert fields["8_intended_carrier_means_sea"]["/V"] == "/Off"
    assert fields["6_intended_period_first_departure_date"]["/V"] == "03/01/2025"


def test_official_form_export_of_empty_notification(client, alice, notification_id):
    response = client.get(f"/api/notifications/{notification_id}/generate-pdf", headers=alice)

    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")


def test_custom_report_export(client, alice, notification_id, converter):
    client.put(
        f"/api/notifications/{notification_id}",
        json={"3_notification_details_notification_no": "CA-2025-0417"},
        headers=alice,
    )

    response = client.get(f"/api/notifications/{notification_id}/generate-custom-pdf", headers=alice)

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == (
        f'attachment; filename="Basel_Notification_Custom_{notification_id}.pdf"'
    )
    assert response.content == converter.result
    assert "CA-2025-0417" in converter.calls[0]


@pytest.mark.parametrize("export", EXPORTS)
def test_export_requires_token(client, notification_id, export):
    response = client.get(f"/api/notifications/{notification_id}/{export}")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.parametrize("export", EXPORTS)
def test_export_of_unknown_notification(client, alice, export):
    response = client.get(f"/api/notifications/{uuid4()}/{export}", headers=alice)

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.parametrize("export", EXPORTS)
def test_export_by_other_user_is_forbidden(client, bob, notification_id, export):
    response = client.get(f"/api/notifications/{notification_id}/{export}", headers=bob)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.parametrize("export", EXPORTS)
def test_export_is_owner_only_even_for_admin(client, admin, notification_id, export):
    response = client.get(f"/api/notifications/{notification_id}/{export}", headers=admin)

    assert response.status_code == 403


def test_renderer_failure_returns_server_error(client, alice, notification_id, converter):
    converter.error = RenderError("Chromium PDF rendering failed: Timeout 30000ms exceeded")

    response = client.get(f"/api/notifications/{notification_id}/generate-custom-pdf", headers=alice)

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": {
            "message": "Chromium PDF rendering failed: Timeout 30000ms exceeded",
            "code": "SERVER_ERROR",
        },
    }


def test_missing_template_returns_server_error(client, alice, notification_id, tmp_path):
    from basel_compliance.api.deps import get_acroform_filler
    from basel_compliance.pdf.acroform_filler import AcroFormFiller

    client.app.dependency_overrides[get_acroform_filler] = lambda: AcroFormFiller(tmp_path / "gone.pdf")

    response = client.get(f"/api/notifications/{notification_id}/generate-pdf", headers=alice)

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "SERVER_ERROR"
    assert "PDF template not found" in error["message"]


def test_admin_opening_a_package_does_not_become_owner(client, alice, admin):
    package_id = client.post("/api/packages", json={"title": "Batteries"}, headers=alice).json()["data"]["id"]
    notification = client.get(f"/api/notifications/package/{package_id}", headers=admin).json()["data"]

    assert client.get(f"/api/notifications/{notification['id']}/generate-pdf", headers=admin).status_code == 403
    assert client.get(f"/api/notifications/{notification['id']}/generate-pdf", headers=alice).status_code == 200

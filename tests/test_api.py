from sqlalchemy import select

from models import User


async def test_root_and_health(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json()["success"] is True

    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["data"]["backend"] == "ok"


async def test_submit_emergency_envelope(client, make_volunteer):
    await make_volunteer()

    response = await client.post(
        "/api/emergency",
        json={
            "emergency_type": "medical",
            "description": "Two people trapped after a fall",
            "people_count": 12,
            "contact_number": "(555) 123-4567",
            "can_call": True,
            "address": "4700 Taft Blvd, Wichita Falls, TX 76308",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["volunteersNeeded"] == 3
    assert body["data"]["zone"] == "Wichita Falls"
    assert body["data"]["totalNearbyVolunteers"] == 1
    assert body["data"]["notifiedCount"] == 1

    status = await client.get(f"/api/emergency/status/{body['data']['requestId']}")
    assert status.status_code == 200
    assert status.json()["data"]["severity"] == "high"
    assert status.json()["data"]["volunteers_needed"] == 3


async def test_submit_emergency_validation_error(client):
    response = await client.post(
        "/api/emergency",
        json={"emergency_type": "fire", "description": "Kitchen fire", "contact_number": "123"},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "10 digits" in body["message"]
    assert "detail" not in body


async def test_unknown_request_is_404(client):
    response = await client.get("/api/emergency/4242")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Emergency request not found"}


async def test_register_login_and_profile(client, session_factory):
    response = await client.post(
        "/api/volunteer",
        json={
            "name": "Ana Rivera",
            "email": "ana@rescuelink.org",
            "phone": "940-555-0101",
            "password": "supersecret",
            "confirmPassword": "supersecret",
            "zone": "Wichita Falls",
            "skills": ["first aid"],
            "agreed_to_terms": True,
        },
    )
    assert response.status_code == 201
    registered = response.json()["data"]
    assert registered["status"] == "active"
    assert registered["token"]

    async with session_factory() as session:
        mirrored = (await session.execute(select(User).where(User.email == "ana@rescuelink.org"))).scalar_one()
    assert mirrored.role == "volunteer"

    duplicate = await client.post(
        "/api/volunteer",
        json={
            "name": "Ana Again",
            "email": "ana@rescuelink.org",
            "phone": "940-555-0199",
            "password": "supersecret",
            "confirmPassword": "supersecret",
            "zone": "Wichita Falls",
            "agreed_to_terms": True,
        },
    )
    assert duplicate.status_code == 409

    bad_login = await client.post(
        "/api/volunteer/login", json={"email": "ana@rescuelink.org", "password": "nope-nope"}
    )
    assert bad_login.status_code == 401
    assert "token" not in (bad_login.json().get("data") or {})

    login = await client.post(
        "/api/volunteer/login", json={"email": "ana@rescuelink.org", "password": "supersecret"}
    )
    assert login.status_code == 200
    data = login.json()["data"]
    assert "password_hash" not in data["volunteer"]
    assert data["volunteer"]["last_login"] is not None

    profile = await client.get(
        "/api/volunteer/profile", headers={"Authorization": f"Bearer {data['token']}"}
    )
    assert profile.status_code == 200
    assert profile.json()["data"]["email"] == "ana@rescuelink.org"


async def test_token_errors(client):
    missing = await client.get("/api/volunteer/profile")
    assert missing.status_code == 401
    assert missing.json()["message"] == "Access token required"

    invalid = await client.get("/api/volunteer/profile", headers={"Authorization": "Bearer not.a.token"})
    assert invalid.status_code == 403
    assert invalid.json()["message"] == "Invalid or expired token"


async def test_accept_flow_over_http(client, make_request, make_volunteer, auth_header):
    request = await make_request(people_count=4)
    first = await make_volunteer()
    second = await make_volunteer()

    available = await client.get("/api/volunteer/available-requests", headers=auth_header(first))
    assert [r["id"] for r in available.json()["data"]] == [request.id]

    accepted = await client.post(
        "/api/volunteer/accept-request", json={"request_id": request.id}, headers=auth_header(first)
    )
    assert accepted.status_code == 200
    assert accepted.json()["data"] == {
        "assignmentId": accepted.json()["data"]["assignmentId"],
        "remainingSlots": 0,
        "totalAssigned": 1,
    }

    full = await client.post(
        "/api/volunteer/accept-request", json={"request_id": request.id}, headers=auth_header(second)
    )
    assert full.status_code == 400
    assert full.json()["success"] is False

    assignments = await client.get(f"/api/volunteer/assignments/{first.id}")
    assert len(assignments.json()["data"]) == 1

    assignment_id = accepted.json()["data"]["assignmentId"]
    completed = await client.post(
        f"/api/assignments/{assignment_id}/complete",
        json={"people_served": 4, "notes": "Everyone evacuated"},
        headers=auth_header(first),
    )
    assert completed.status_code == 200
    assert completed.json()["data"]["status"] == "completed"

    status = await client.get(f"/api/emergency/status/{request.id}")
    assert status.json()["data"]["status"] == "completed"
    assert status.json()["data"]["volunteers_completed"] == 1


async def test_legacy_assign(client, make_request, make_volunteer):
    request = await make_request(people_count=10)
    volunteer = await make_volunteer(available=False)

    response = await client.post(
        "/api/volunteer/assign", json={"volunteer_id": volunteer.id, "request_id": request.id}
    )
    assert response.status_code == 200
    assert response.json()["data"]["remainingSlots"] == 1

    again = await client.post(
        "/api/volunteer/assign", json={"volunteer_id": volunteer.id, "request_id": request.id}
    )
    assert again.status_code == 400


async def test_notifications_over_http(client, make_volunteer, auth_header):
    volunteer = await make_volunteer()
    await client.post(
        "/api/emergency",
        json={
            "emergency_type": "flood",
            "description": "Street under water",
            "contact_number": "5551234567",
            "address": "Riverside, Wichita Falls",
        },
    )

    inbox = await client.get(f"/api/notifications/volunteer/{volunteer.id}", headers=auth_header(volunteer))
    assert inbox.status_code == 200
    notifications = inbox.json()["data"]
    assert len(notifications) == 1
    assert notifications[0]["emergency_type"] == "flood"
    assert notifications[0]["request_location"] == "Riverside, Wichita Falls"

    other = await client.get(f"/api/notifications/volunteer/{volunteer.id + 1}", headers=auth_header(volunteer))
    assert other.status_code == 403

    notification_id = notifications[0]["id"]
    for _ in range(2):
        read = await client.put(
            f"/api/notifications/{notification_id}/read", json={"volunteerId": volunteer.id}
        )
        assert read.status_code == 200
        assert read.json()["data"]["status"] == "read"

    missing = await client.put("/api/notifications/9999/read", json={"volunteerId": volunteer.id})
    assert missing.status_code == 404

    read_all = await client.put(
        f"/api/notifications/volunteer/{volunteer.id}/read-all", headers=auth_header(volunteer)
    )
    assert read_all.json()["data"] == {"updated": 0}


async def test_availability_toggle(client, make_volunteer, auth_header):
    volunteer = await make_volunteer()
    response = await client.put(
        "/api/volunteer/availability", json={"available": False}, headers=auth_header(volunteer)
    )
    assert response.status_code == 200
    assert response.json()["data"]["available"] is False


async def test_relief_providers(client):
    created = await client.post(
        "/api/relief",
        json={"name": "Red River Food Bank", "type_of_relief": "food, water", "capacity": 200},
    )
    assert created.status_code == 200
    assert created.json()["data"]["type_of_relief"] == ["food", "water"]

    listed = await client.get("/api/relief")
    assert [p["name"] for p in listed.json()["data"]] == ["Red River Food Bank"]

    invalid = await client.post("/api/relief", json={"name": "", "capacity": -1})
    assert invalid.status_code == 400


async def test_unknown_path_and_method_use_error_envelope(client):
    missing = await client.get("/api/nope")
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "message": "Not Found"}

    wrong_method = await client.delete("/api/emergency")
    assert wrong_method.status_code == 405
    assert wrong_method.json() == {"success": False, "message": "Method Not Allowed"}
    assert "POST" in wrong_method.headers["allow"]


async def test_oversized_intake_fields_are_400(client):
    base = {
        "emergency_type": "medical",
        "description": "Needs help",
        "contact_number": "5551234567",
        "address": "4700 Taft Blvd, Wichita Falls",
    }

    long_type = await client.post("/api/emergency", json={**base, "emergency_type": "m" * 51})
    assert long_type.status_code == 400
    assert long_type.json()["success"] is False

    long_phone = await client.post("/api/emergency", json={**base, "contact_number": "5" * 21})
    assert long_phone.status_code == 400
    assert "20 digits" in long_phone.json()["message"]

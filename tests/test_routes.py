"""
Tests for the HTTP layer - dashboard, apply flow, portal and health.
"""

import pytest

from hirelane.models import Application, Stage
from conftest import _make_user, auth_headers_for


@pytest.fixture
def full_answers(strong_answers):
    return dict(strong_answers)


def apply(client, job, answers, **candidate):
    person = {"full_name": "Alice Johnson", "email": "alice@example.com"}
    person.update(candidate)
    return client.post(f"/api/apply/{job.id}", json={"candidate": person, "answers": answers})


class TestHealth:
    def test_reports_database(self, client, tenant):
        body = client.get("/api/health").get_json()
        assert body["status"] == "ok"
        assert body["db_status"] == "connected"
        assert body["tenant_count"] == 1


class TestAuthRoutes:
    def test_register_then_login_then_me(self, client):
        response = client.post("/api/auth/register",
                               json={"name": "Jane", "email": "jane@acme.com", "password": "pw"})
        assert response.status_code == 201

        response = client.post("/api/auth/login", json={"email": "jane@acme.com", "password": "pw"})
        assert response.status_code == 200
        token = response.get_json()["access_token"]

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"}).get_json()
        assert me["email"] == "jane@acme.com"
        assert me["role"] == "admin"
        assert me["tenant_name"] == "acme Workspace"

    def test_login_bad_password(self, client, recruiter):
        response = client.post("/api/auth/login", json={"email": "recruiter@acme.com", "password": "bad"})
        assert response.status_code == 401

    def test_login_requires_body(self, client):
        assert client.post("/api/auth/login").status_code == 400


class TestDashboardJobs:
    def test_create_requires_title(self, client, auth_headers):
        response = client.post("/api/dashboard/jobs", json={"title": " "}, headers=auth_headers)
        assert response.status_code == 400
        assert response.get_json()["error"] == "title is required"

    def test_create_list_update(self, client, auth_headers):
        created = client.post("/api/dashboard/jobs", headers=auth_headers, json={
            "title": "Platform Engineer", "location": "Remote", "is_remote": "on",
        })
        assert created.status_code == 201
        job_id = created.get_json()["id"]
        assert created.get_json()["is_remote"] is True

        listed = client.get("/api/dashboard/jobs", headers=auth_headers).get_json()["data"]
        assert [j["id"] for j in listed] == [job_id]

        updated = client.put(f"/api/dashboard/jobs/{job_id}", headers=auth_headers,
                             json={"title": "Senior Platform Engineer"})
        assert updated.status_code == 200
        assert updated.get_json()["title"] == "Senior Platform Engineer"
        assert updated.get_json()["is_remote"] is False

    def test_other_tenant_job_is_not_found(self, client, auth_headers, other_job):
        assert client.get(f"/api/dashboard/jobs/{other_job.id}", headers=auth_headers).status_code == 404
        response = client.put(f"/api/dashboard/jobs/{other_job.id}", headers=auth_headers, json={"title": "x"})
        assert response.status_code == 404

    def test_interview_slots(self, client, auth_headers, job):
        response = client.post(f"/api/dashboard/jobs/{job.id}/slots", headers=auth_headers, json={
            "starts_at": "2030-01-01T10:00:00", "ends_at": "2030-01-01T11:00:00",
        })
        assert response.status_code == 201

        slots = client.get(f"/api/dashboard/jobs/{job.id}/slots", headers=auth_headers).get_json()["data"]
        assert len(slots) == 1
        assert slots[0]["is_booked"] is False

    def test_interview_slot_with_mixed_offsets(self, client, auth_headers, job):
        response = client.post(f"/api/dashboard/jobs/{job.id}/slots", headers=auth_headers, json={
            "starts_at": "2030-01-01T10:00:00+00:00", "ends_at": "2030-01-01T11:00:00",
        })
        assert response.status_code == 201
        assert response.get_json()["starts_at"] == "2030-01-01T10:00:00"


class TestApplyFlow:
    def test_job_and_questions(self, client, job):
        body = client.get(f"/api/apply/{job.id}").get_json()
        assert body["title"] == job.title
        assert body["tenant_name"] == "Acme Corporation"

        questions = client.get(f"/api/apply/{job.id}/questions").get_json()["questions"]
        assert questions[0]["key"] == "yearsExperience"

    def test_unknown_job(self, client, tenant):
        assert client.get("/api/apply/nope").status_code == 404
        assert client.get("/api/apply/nope/questions").status_code == 404

    def test_apply_and_reapply(self, client, job, full_answers):
        first = apply(client, job, full_answers)
        assert first.status_code == 201
        assert first.get_json()["status"] == "applied"
        assert first.get_json()["score"] == 100

        second = apply(client, job, full_answers)
        assert second.status_code == 200
        assert second.get_json() == {"status": "already_applied",
                                     "application_id": first.get_json()["application_id"]}

    def test_missing_contact(self, client, job, full_answers):
        response = apply(client, job, full_answers, email="", phone="")
        assert response.status_code == 400
        assert response.get_json()["error"] == "either email or phone is required"

    def test_required_questions_enforced_by_form(self, client, job):
        response = apply(client, job, {"yearsExperience": "3"})
        assert response.status_code == 400
        assert "reactExperience" in response.get_json()["missing"]

    def test_signed_in_applicant_is_linked(self, client, store, job, full_answers):
        from hirelane.models import Candidate, User
        user = User(email="alice@example.com", password="x", role="candidate")
        store.session.add(user)
        store.session.commit()

        client.post(f"/api/apply/{job.id}", headers=auth_headers_for(user),
                    json={"candidate": {"full_name": "Alice", "email": "alice@example.com"},
                          "answers": full_answers})

        assert store.session.query(Candidate).one().external_user_id == user.id

    def test_recruiter_token_is_not_linked_to_the_applicant(self, client, store, job, auth_headers, full_answers):
        from hirelane.models import Candidate
        apply(client, job, full_answers)
        client.post(f"/api/apply/{job.id}", headers=auth_headers,
                    json={"candidate": {"full_name": "Alice", "email": "alice@example.com"},
                          "answers": full_answers})

        assert store.session.query(Candidate).one().external_user_id is None

    def test_body_must_be_an_object(self, client, job):
        response = client.post(f"/api/apply/{job.id}", json=["not", "an", "object"])
        assert response.status_code == 400

    @pytest.mark.parametrize("candidate", [["Alice"], "Alice"])
    def test_candidate_must_be_an_object(self, client, job, full_answers, candidate):
        response = client.post(f"/api/apply/{job.id}", json={"candidate": candidate, "answers": full_answers})
        assert response.status_code == 400
        assert response.get_json()["error"] == "candidate must be an object"

    def test_answers_must_be_an_object(self, client, job):
        response = client.post(f"/api/apply/{job.id}", json={
            "candidate": {"full_name": "Alice", "email": "alice@example.com"},
            "answers": ["3", "2"],
        })
        assert response.status_code == 400
        assert response.get_json()["error"] == "answers must be an object"

    def test_phone_of_another_applicant_does_not_break_apply(self, client, store, job, recruiter, full_answers):
        from hirelane.services.jobs import create_job
        second_job = create_job(store, job.tenant_id, recruiter.id, "Backend Developer")
        apply(client, job, full_answers, full_name="Alice", email="a@example.com")
        apply(client, job, full_answers, full_name="Bob", email="b@example.com", phone="555")

        response = apply(client, second_job, full_answers, full_name="Alice", email="a@example.com", phone="555")

        assert response.status_code == 201
        assert response.get_json()["status"] == "applied"


class TestDashboardApplications:
    @pytest.fixture
    def application_id(self, client, job, full_answers):
        return apply(client, job, full_answers).get_json()["application_id"]

    def test_list_and_filter(self, client, auth_headers, job, application_id, weak_answers):
        weak = dict(weak_answers, currentRole="Intern", systemDesign="n/a", preferredWork="onsite")
        apply(client, job, weak, full_name="Bob", email="bob@example.com")

        everything = client.get("/api/dashboard/applications", headers=auth_headers).get_json()["data"]
        assert len(everything) == 2

        strong = client.get("/api/dashboard/applications?min_score=80", headers=auth_headers).get_json()["data"]
        assert [a["id"] for a in strong] == [application_id]
        assert strong[0]["candidate"]["full_name"] == "Alice Johnson"
        assert strong[0]["job"]["title"] == job.title

        new = client.get("/api/dashboard/applications?stage=NEW&job_id=" + job.id,
                         headers=auth_headers).get_json()["data"]
        assert len(new) == 2

    def test_bad_filters(self, client, auth_headers):
        assert client.get("/api/dashboard/applications?stage=BOGUS", headers=auth_headers).status_code == 400
        assert client.get("/api/dashboard/applications?min_score=high", headers=auth_headers).status_code == 400

    def test_detail_includes_answers(self, client, auth_headers, application_id):
        body = client.get(f"/api/dashboard/applications/{application_id}", headers=auth_headers).get_json()
        assert body["stage"] == "NEW"
        assert body["candidate"]["email"] == "alice@example.com"
        assert {a["question_key"] for a in body["answers"]} >= {"yearsExperience", "systemDesign"}

    def test_stage_and_notes(self, client, store, auth_headers, job, application_id):
        response = client.post(f"/api/dashboard/applications/{application_id}/stage",
                               headers=auth_headers, json={"stage": "SHORTLISTED"})
        assert response.status_code == 200
        response = client.post(f"/api/dashboard/applications/{application_id}/notes",
                               headers=auth_headers, data={"notes": "Call back Tuesday"})
        assert response.status_code == 200

        store.session.expire_all()
        application = store.session.get(Application, application_id)
        assert application.stage is Stage.SHORTLISTED
        assert application.notes == "Call back Tuesday"

    def test_stage_requires_value(self, client, auth_headers, application_id):
        response = client.post(f"/api/dashboard/applications/{application_id}/stage",
                               headers=auth_headers, json={})
        assert response.status_code == 400

    def test_other_tenant_cannot_see_or_change(self, client, store, other_tenant, application_id):
        outsider = _make_user(other_tenant, "boss@globex.com")
        headers = auth_headers_for(outsider)

        assert client.get(f"/api/dashboard/applications/{application_id}", headers=headers).status_code == 404
        assert client.get("/api/dashboard/applications", headers=headers).get_json()["data"] == []

        # same answer as for an application the caller owns: nothing leaks
        response = client.post(f"/api/dashboard/applications/{application_id}/stage",
                               headers=headers, json={"stage": "REJECTED"})
        assert response.status_code == 200

        store.session.expire_all()
        assert store.session.get(Application, application_id).stage is Stage.NEW


class TestTeamRoutes:
    def test_admin_adds_member(self, client, auth_headers, tenant):
        response = client.post("/api/dashboard/team", headers=auth_headers,
                               json={"name": "Sam", "email": "sam@acme.com", "password": "pw"})
        assert response.status_code == 201
        assert response.get_json()["tenant_id"] == tenant.id

        members = client.get("/api/dashboard/team", headers=auth_headers).get_json()
        assert members["is_admin"] is True
        assert {m["email"] for m in members["data"]} == {"recruiter@acme.com", "sam@acme.com"}

    def test_duplicate_member(self, client, auth_headers):
        response = client.post("/api/dashboard/team", headers=auth_headers,
                               json={"email": "recruiter@acme.com", "password": "pw"})
        assert response.status_code == 400


class TestPortal:
    def test_open_jobs_across_tenants(self, client, job, other_job):
        jobs = client.get("/api/portal/jobs").get_json()["data"]
        assert {j["id"] for j in jobs} == {job.id, other_job.id}

    def test_my_applications_without_session(self, client, tenant):
        assert client.get("/api/portal/my-applications").status_code == 401
        assert client.get("/api/portal").get_json()["my_applications"] == 0

    def test_my_applications_after_apply(self, client, job, full_answers):
        apply(client, job, full_answers)

        data = client.get("/api/portal/my-applications").get_json()["data"]
        assert len(data) == 1
        assert data[0]["stage_description"] == "Application received"
        assert "notes" not in data[0]
        assert client.get("/api/portal").get_json() == {"open_jobs": 1, "my_applications": 1}

    def test_lookup_restores_session(self, app, job, full_answers):
        apply(app.test_client(), job, full_answers)

        fresh = app.test_client()
        assert fresh.get("/api/portal/my-applications").status_code == 401
        assert fresh.post("/api/portal/lookup", json={"email": "alice@example.com"}).status_code == 200
        assert len(fresh.get("/api/portal/my-applications").get_json()["data"]) == 1

    def test_lookup_unknown_email(self, client, tenant):
        assert client.post("/api/portal/lookup", json={"email": "ghost@example.com"}).status_code == 404
        assert client.post("/api/portal/lookup", json={}).status_code == 400

    def test_logout_clears_session(self, client, job, full_answers):
        apply(client, job, full_answers)
        client.post("/api/portal/logout")
        assert client.get("/api/portal/my-applications").status_code == 401

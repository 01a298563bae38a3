import pytest
from fastapi.testclient import TestClient

from app.api import deps
from app.api.main import app
from app.services import session_store


@pytest.fixture
def client():
    session_store.clear()
    with TestClient(app) as c:
        yield c
    session_store.clear()


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok", "reference_loaded": True}


class TestGrowth:
    def test_score_with_age(self, client):
        r = client.post("/growth/score", json={"sex": "male", "metric": "weight", "value": 40, "age": 10})
        assert r.status_code == 200
        body = r.json()
        assert body["sd"] == 1.1
        assert body["raw_sd"] == pytest.approx(1.113, abs=1e-3)

    def test_score_with_dates(self, client):
        r = client.post(
            "/growth/score",
            json={
                "sex": "female",
                "metric": "height",
                "value": 84.6,
                "birth_date": "2020-01-01",
                "measurement_date": "2022-01-01",
            },
        )
        assert r.status_code == 200
        assert r.json()["age"] == pytest.approx(731 / 365.28)

    def test_score_needs_age(self, client):
        r = client.post("/growth/score", json={"sex": "male", "metric": "height", "value": 100})
        assert r.status_code == 422

    def test_score_rejects_non_positive(self, client):
        r = client.post("/growth/score", json={"sex": "male", "metric": "height", "value": 0, "age": 3})
        assert r.status_code == 422

    def test_value(self, client):
        r = client.post("/growth/value", json={"sex": "male", "metric": "height", "sd": 0, "age": 5})
        assert r.status_code == 200
        assert r.json()["value"] == pytest.approx(106.8)

    def test_reference_not_loaded(self, client, monkeypatch):
        monkeypatch.setattr(deps, "reference_store", None)
        r = client.post("/growth/value", json={"sex": "male", "metric": "height", "sd": 0, "age": 5})
        assert r.status_code == 503


class TestCurves:
    def test_default_levels(self, client):
        r = client.get("/curves/male/height")
        assert r.status_code == 200
        body = r.json()
        assert [c["sd_level"] for c in body["curves"]] == [3, 2, 1, 0, -1, -2, -2.5, -3]
        assert len(body["curves"][0]["points"]) == 176
        dashed = [c["style"]["label"] for c in body["curves"] if c["style"]["dash"]]
        assert dashed == ["-2.5SD", "-3SD"]

    def test_custom_levels_and_step(self, client):
        r = client.get("/curves/female/weight", params=[("sd", 0), ("age_step", 0.5)])
        assert r.status_code == 200
        curves = r.json()["curves"]
        assert len(curves) == 1
        assert curves[0]["points"][0] == {"age": 0.0, "value": pytest.approx(2.95)}

    def test_age_step_floor(self, client):
        assert client.get("/curves/male/height", params={"age_step": 1e-7}).status_code == 422
        assert client.get("/curves/male/height", params={"age_step": 0.01}).status_code == 200

    def test_unknown_table(self, client):
        assert client.get("/curves/male/bmi").status_code == 404
        assert client.get("/curves/other/height").status_code == 404


class TestSessions:
    def _create(self, client, **child):
        body = {"patient_id": "7", "full_name": "Taro", "birth_date": "2015-04-01", "gender": "male"}
        body.update(child)
        r = client.post("/sessions", json=body)
        assert r.status_code == 200
        return r.json()

    def test_lifecycle(self, client):
        sid = self._create(client)["session_id"]

        r = client.post(f"/sessions/{sid}/measurements", json={"date": "2020-04-01", "height": 110.0, "weight": 18.5})
        assert r.status_code == 200
        rows = r.json()["measurements"]
        assert len(rows) == 1
        assert rows[0]["index"] == 0
        assert rows[0]["height_status"] == "normal"

        r = client.patch(f"/sessions/{sid}/child", json={"gender": "female"})
        assert r.status_code == 200
        assert r.json()["child"]["gender"] == "female"
        assert r.json()["measurements"][0]["weight_sd"] != rows[0]["weight_sd"]

        r = client.delete(f"/sessions/{sid}/measurements/0")
        assert r.status_code == 200
        assert r.json()["measurements"] == []

        assert client.delete(f"/sessions/{sid}").status_code == 200
        assert client.get(f"/sessions/{sid}").status_code == 404

    def test_out_of_range_age(self, client):
        sid = self._create(client, birth_date="2000-01-01")["session_id"]
        r = client.post(f"/sessions/{sid}/measurements", json={"date": "2019-01-01", "height": 170, "weight": 60})
        assert r.status_code == 422
        assert client.get(f"/sessions/{sid}").json()["measurements"] == []

    def test_missing_weight(self, client):
        sid = self._create(client)["session_id"]
        r = client.post(f"/sessions/{sid}/measurements", json={"date": "2020-04-01", "height": 110.0})
        assert r.status_code == 422

    def test_delete_missing_index(self, client):
        sid = self._create(client)["session_id"]
        assert client.delete(f"/sessions/{sid}/measurements/3").status_code == 404

    def test_unknown_session(self, client):
        assert client.get("/sessions/nope").status_code == 404
        r = client.post("/sessions/nope/measurements", json={"date": "2020-04-01", "height": 1, "weight": 1})
        assert r.status_code == 404

    def test_null_name_rejected_and_state_kept(self, client):
        sid = self._create(client)["session_id"]
        r = client.patch(f"/sessions/{sid}/child", json={"patient_id": None})
        assert r.status_code == 422
        r = client.patch(f"/sessions/{sid}/child", json={"full_name": None, "gender": "female"})
        assert r.status_code == 422
        r = client.get(f"/sessions/{sid}")
        assert r.status_code == 200
        assert r.json()["child"]["patient_id"] == "7"
        assert r.json()["child"]["full_name"] == "Taro"
        assert r.json()["child"]["gender"] == "male"

    def test_birth_date_can_be_cleared(self, client):
        sid = self._create(client)["session_id"]
        r = client.patch(f"/sessions/{sid}/child", json={"birth_date": None})
        assert r.status_code == 200
        assert r.json()["child"]["birth_date"] is None

    def test_chart_filename(self, client):
        out = self._create(client, patient_id="", full_name="Hanako")
        assert out["chart_filename"].startswith("growth_chart_0_Hanako_")

    def test_list(self, client):
        a = self._create(client)["session_id"]
        b = self._create(client)["session_id"]
        assert client.get("/sessions").json() == {"session_ids": [a, b]}

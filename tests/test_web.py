from __future__ import annotations

import pytest

from loan_rate_web.app import create_app


@pytest.fixture()
def client(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "SECRET_KEY": "test",
            "PREFERENCE_DATABASE_URL": f"sqlite:///{tmp_path / 'prefs.sqlite3'}",
        }
    )
    return app.test_client()


def test_index_defaults_to_car_tab(client):
    resp = client.get("/")
    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "Car installments with a flat rate" in body
    assert "11,250 บาท" in body
    assert "structureChart" in body


def test_home_tab_with_posted_inputs(client):
    resp = client.post(
        "/",
        data={
            "tab": "home",
            "price": "3,000,000",
            "down_percent": "10",
            "rate": "3",
            "years": "30",
            "first_month_days": "31",
        },
    )
    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "reducing balance" in body
    assert "6,879.45" in body


def test_unknown_tab_falls_back_to_car(client):
    resp = client.get("/?tab=boat")
    assert "Car installments with a flat rate" in resp.get_data(as_text=True)


def test_invalid_input_shows_error(client):
    resp = client.post("/", data={"tab": "car", "price": "lots"})
    assert resp.status_code == 200
    assert "Invalid amount" in resp.get_data(as_text=True)


def test_invalid_day_count_shows_error(client):
    resp = client.post("/", data={"tab": "home", "first_month_days": "27"})
    assert "Days in month must be one of" in resp.get_data(as_text=True)


def test_day_count_must_be_a_number(client):
    body = client.post("/", data={"tab": "home", "first_month_days": "abc"}).get_data(as_text=True)
    assert "Invalid day count: abc" in body
    assert "Invalid term" not in body


def test_theme_toggle_persists(client):
    assert '<html lang="en" class="">' in client.get("/").get_data(as_text=True)
    resp = client.post("/theme", data={"tab": "home"})
    assert resp.status_code == 302
    assert "tab=home" in resp.headers["Location"]
    assert '<html lang="en" class="dark">' in client.get("/").get_data(as_text=True)
    client.post("/theme", data={"tab": "car"})
    assert '<html lang="en" class="">' in client.get("/").get_data(as_text=True)


def test_theme_toggle_keeps_inputs(client):
    body = client.post("/", data={"tab": "car", "price": "1,000,000", "down_percent": "20"}).get_data(as_text=True)
    assert '<input type="hidden" name="price" value="1000000">' in body
    resp = client.post(
        "/theme",
        data={"tab": "car", "price": "1000000", "down_percent": "20", "rate": "2.5", "years": "5", "vehicle_type": "used"},
        follow_redirects=True,
    )
    body = resp.get_data(as_text=True)
    assert '<html lang="en" class="dark">' in body
    assert 'id="price" name="price" type="number"' in body
    assert 'value="1000000"' in body
    assert "200,000" in body
    assert 'value="used" checked' in body


def test_price_and_down_sliders(client):
    car = client.get("/").get_data(as_text=True)
    assert 'id="down_slider" type="range" min="0" max="50" step="5"' in car
    assert 'id="price_slider" type="range" min="100000" max="5000000" step="10000"' in car
    home = client.get("/?tab=home").get_data(as_text=True)
    assert 'id="down_slider" type="range" min="0" max="60" step="1"' in home
    assert 'id="price_slider" type="range" min="500000" max="20000000" step="50000"' in home


def test_infographic_download(client):
    resp = client.get("/infographic.png?tab=home&years=25&first_month_days=30")
    assert resp.status_code == 200
    assert resp.mimetype == "image/png"
    assert "home-loan-infographic-" in resp.headers["Content-Disposition"]
    assert resp.data.startswith(b"\x89PNG")


def test_infographic_bad_input(client):
    resp = client.get("/infographic.png?tab=car&vehicle_type=truck")
    assert resp.status_code == 400
    assert "Unknown vehicle type" in resp.get_json()["error"]


def test_api_car(client):
    resp = client.get("/api/car?price=800000&down_percent=25&rate=2.5&years=5&vehicle_type=used")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["result"]["monthly_total"] == 12037.5
    assert data["result"]["total_paid"] == 922250.0
    assert [row["years"] for row in data["comparison"]] == [4, 5, 6, 7]


def test_api_home_clamps_down_percent(client):
    resp = client.get("/api/home?down_percent=250")
    data = resp.get_json()
    assert data["result"]["principal"] == 0.0
    assert data["result"]["monthly_payment"] == 0.0

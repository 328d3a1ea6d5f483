import pytest

from services.clients.dto import (
    ClientDTO,
    ClientFormData,
    ClientPayloadError,
    active_to_status,
    status_to_active,
)


def test_status_conversion():
    assert status_to_active("Active") is True
    assert status_to_active("Inactive") is False
    assert status_to_active(None) is False
    assert active_to_status(True) == "Active"
    assert active_to_status(False) == "Inactive"


def test_form_payload_maps_status_to_boolean():
    form = ClientFormData(name="Bo", email="b@x.com", status="Inactive")

    assert form.to_payload() == {"name": "Bo", "email": "b@x.com", "isactive": False}


def test_form_payload_includes_optional_fields():
    form = ClientFormData(
        name=" Ann ", email="ann@X.COM", job="Designer", rate="1 200,5", status="Active"
    )

    assert form.to_payload() == {
        "name": "Ann",
        "email": "ann@X.COM",
        "job": "Designer",
        "rate": 1200.5,
        "isactive": True,
    }


def test_form_payload_rejects_bad_rate():
    with pytest.raises(ValueError):
        ClientFormData(name="Bo", email="b@x.com", rate="abc").to_payload()


def test_blank_form_defaults():
    form = ClientFormData.blank()

    assert (form.name, form.email, form.job, form.rate, form.status) == (
        "",
        "",
        "",
        "",
        "Inactive",
    )


def test_form_prefilled_from_client(make_client):
    client = make_client(5, "Ann", "a@x.com", job="Dev", rate=45.0, isactive=True)

    form = ClientFormData.from_client(client)

    assert form == ClientFormData(
        name="Ann", email="a@x.com", job="Dev", rate="45", status="Active"
    )


def test_from_api_parses_record():
    client = ClientDTO.from_api(
        {"id": 7, "name": "Ann", "email": "a@x.com", "rate": "45.5", "isactive": True}
    )

    assert client == ClientDTO(7, "Ann", "a@x.com", None, 45.5, True)


@pytest.mark.parametrize(
    "payload",
    [
        None,
        [],
        {"name": "Ann", "email": "a@x.com"},
        {"id": 1, "email": "a@x.com"},
        {"id": 1, "name": "Ann", "email": "a@x.com", "rate": "lots"},
    ],
)
def test_from_api_rejects_malformed_payload(payload):
    with pytest.raises(ClientPayloadError):
        ClientDTO.from_api(payload)


def test_parse_many_requires_list():
    with pytest.raises(ClientPayloadError):
        ClientDTO.parse_many({"id": 1})


def test_to_payload_and_toggle(make_client):
    client = make_client(1, "Ann", "a@x.com", job="Dev", rate=10.0, isactive=False)

    toggled = client.with_toggled_status()

    assert toggled.to_payload() == {
        "name": "Ann",
        "email": "a@x.com",
        "job": "Dev",
        "rate": 10.0,
        "isactive": True,
    }
    assert client.isactive is False


@pytest.mark.parametrize("rate, text", [(12.345, "12.345"), (45.0, "45"), (0.001, "0.001"), (None, "")])
def test_form_keeps_rate_precision(make_client, rate, text):
    client = make_client(1, "Ann", "a@x.com", rate=rate)

    form = ClientFormData.from_client(client)

    assert form.rate == text
    assert form.to_payload().get("rate") == rate


def test_form_payload_with_exponent_rate():
    form = ClientFormData(name="Bo", email="b@x.com", rate="1e3")

    assert form.to_payload()["rate"] == 1000.0


def test_edit_payload_sends_cleared_fields(make_client):
    client = make_client(1, "Ann", "a@x.com", job="Dev", rate=10.0, isactive=False)
    form = ClientFormData.from_client(client)
    form.job = ""
    form.rate = ""

    assert form.to_payload(include_empty=True) == {
        "name": "Ann",
        "email": "a@x.com",
        "job": None,
        "rate": None,
        "isactive": False,
    }
    assert form.to_payload() == {"name": "Ann", "email": "a@x.com", "isactive": False}

from services.clients.clients_controller import filter_clients


def test_filter_by_name_is_case_insensitive(make_client):
    clients = [make_client(1, "Ann", "a@x.com", isactive=True)]

    assert filter_clients(clients, "ann") == clients
    assert filter_clients(clients, "zzz") == []


def test_empty_term_returns_full_collection_in_order(make_client):
    clients = [make_client(3, "Cleo"), make_client(1, "Ann"), make_client(2, "Bob")]

    assert filter_clients(clients, "") == clients
    assert filter_clients(clients, None) == clients


def test_filter_matches_email_and_job(make_client):
    ann = make_client(1, "Ann", "ann@corp.io", job="Accountant")
    bob = make_client(2, "Bob", "bob@home.net", job=None)
    clients = [ann, bob]

    assert filter_clients(clients, "CORP") == [ann]
    assert filter_clients(clients, "count") == [ann]
    assert filter_clients(clients, "home") == [bob]


def test_missing_job_never_matches(make_client):
    bob = make_client(2, "Bob", "bob@home.net", job=None)

    assert filter_clients([bob], "none") == []

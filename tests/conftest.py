import pytest


@pytest.fixture
def students():
    return [
        {"id": 1, "name": "Ann Lee", "email": "ann@x.com", "gender": "F", "nationality": "Kenya"},
        {"id": 2, "name": "Bo Chen", "email": "bo@Y.com", "gender": "male", "nationality": "China"},
        {"id": 3, "name": "Cy Diaz", "email": "cy@x.com", "gender": "nb", "nationality": ""},
        {"id": 4, "name": "Di Eze", "email": "no-at-sign", "gender": "FEMALE"},
        {"id": 5, "name": "Ed Fox", "email": None, "gender": None, "nationality": "Kenya"},
    ]


@pytest.fixture
def sample_csv():
    return (
        "id,name,email,gender\n"
        "1,Ann Lee,ann@x.com,F\n"
        '2,"Chen, Bo",bo@y.com,M\n'
        "3,,cy@x.com,M\n"
    )

import pytest

from asset_tracker.errors import DuplicateEmail, NotFound, ValidationError
from asset_tracker.models import DEFAULT_POSITION


def test_register_employee_normalises_email(employees):
    employee = employees.register('  Priya Shrestha ', ' Priya.Shrestha@Company.com ')

    assert employee.full_name == 'Priya Shrestha'
    assert employee.email == 'priya.shrestha@company.com'
    assert employee.position == DEFAULT_POSITION


def test_register_employee_duplicate_email(employees, alice):
    with pytest.raises(DuplicateEmail):
        employees.register('Alice Clone', 'ALICE@company.com')


@pytest.mark.parametrize('full_name, email', [
    ('', 'someone@company.com'),
    ('Someone', ''),
    ('Someone', 'not-an-email'),
])
def test_register_employee_validation(employees, full_name, email):
    with pytest.raises(ValidationError):
        employees.register(full_name, email)


def test_update_employee(employees, alice):
    updated = employees.update(alice.id, full_name='Alice Martin-Rai', position='Lead Engineer')

    assert updated.full_name == 'Alice Martin-Rai'
    assert updated.position == 'Lead Engineer'
    assert updated.email == 'alice@company.com'
    with pytest.raises(NotFound):
        employees.update(9999, position='Manager')


def test_list_employees_sorted_by_name(employees, bob, alice):
    assert [e.full_name for e in employees.list_employees()] == ['Alice Martin', 'Bob Stone']


def test_employees_api(client, add_employee):
    add_employee(full_name='Sarah Johnson', email='sarah@company.com')
    add_employee()

    names = [e['full_name'] for e in client.get('/api/employees').get_json()]
    assert names == ['John Smith', 'Sarah Johnson']

    response = client.post('/api/employees', json={'full_name': 'John Again', 'email': 'john@company.com'})
    assert response.status_code == 409
    assert response.get_json()['error'] == 'DuplicateEmail'

    response = client.post('/api/employees', json={'email': 'nobody@company.com'})
    assert response.status_code == 400


def test_employee_history_api(client, add_asset, add_employee):
    employee = add_employee()
    asset = add_asset()
    client.post('/api/assignments', json={'asset_id': asset['id'], 'employee_id': employee['id']})

    history = client.get(f"/api/employees/{employee['id']}/history").get_json()

    assert [h['serial_number'] for h in history] == [asset['serial_number']]
    assert client.get('/api/employees/9999/history').status_code == 404

def assign(client, asset_id, employee_id):
    return client.post('/api/assignments', json={'asset_id': asset_id, 'employee_id': employee_id})


def test_assign_and_return(client, add_asset, add_employee):
    asset = add_asset()
    employee = add_employee()

    response = assign(client, asset['id'], employee['id'])
    assert response.status_code == 201
    assignment = response.get_json()
    assert assignment['is_active'] is True
    assert assignment['serial_number'] == asset['serial_number']
    assert assignment['employee_name'] == 'John Smith'

    response = client.post(f"/api/assignments/{assignment['id']}/return")
    assert response.status_code == 200
    returned = response.get_json()
    assert returned['is_active'] is False
    assert returned['returned_at'] >= returned['assigned_at']


def test_assign_conflict(client, add_asset, add_employee):
    asset = add_asset()
    john = add_employee()
    sarah = add_employee(full_name='Sarah Johnson', email='sarah@company.com')
    assign(client, asset['id'], john['id'])

    response = assign(client, asset['id'], sarah['id'])

    assert response.status_code == 409
    assert response.get_json()['error'] == 'AlreadyAssigned'
    active = client.get('/api/assignments/active').get_json()
    assert [a['employee_name'] for a in active] == ['John Smith']


def test_assign_unknown_references(client, add_asset, add_employee):
    asset = add_asset()
    employee = add_employee()

    response = assign(client, 9999, employee['id'])
    assert response.status_code == 404
    assert response.get_json()['error'] == 'NotFound'

    response = assign(client, asset['id'], 9999)
    assert response.status_code == 404


def test_assign_validates_ids(client):
    response = client.post('/api/assignments', json={'asset_id': '1', 'employee_id': 1})
    assert response.status_code == 400

    response = client.post('/api/assignments', json={'asset_id': True, 'employee_id': 1})
    assert response.status_code == 400

    response = client.post('/api/assignments', json={'employee_id': 1})
    assert response.status_code == 400


def test_return_twice(client, add_asset, add_employee):
    asset = add_asset()
    employee = add_employee()
    assignment = assign(client, asset['id'], employee['id']).get_json()

    assert client.post(f"/api/assignments/{assignment['id']}/return").status_code == 200
    response = client.post(f"/api/assignments/{assignment['id']}/return")

    assert response.status_code == 409
    assert response.get_json()['error'] == 'NotFoundOrAlreadyReturned'
    assert client.post('/api/assignments/9999/return').status_code == 409


def test_active_assignments(client, add_asset, add_employee):
    laptop = add_asset()
    phone = add_asset(name='iPhone 15 Pro', asset_type='Phone')
    employee = add_employee()
    first = assign(client, laptop['id'], employee['id']).get_json()
    assign(client, phone['id'], employee['id'])
    client.post(f"/api/assignments/{first['id']}/return")

    active = client.get('/api/assignments/active').get_json()

    assert [a['asset_name'] for a in active] == ['iPhone 15 Pro']
    assert active[0]['employee_email'] == 'john@company.com'

import os

from airways.config import settings
from tests.conftest import auth_headers, make_flight


def booking_payload(flight_id, seats=('1A', '1B')):
    return {
        'flight_id': flight_id,
        'seats': list(seats),
        'passenger_details': [
            {'name': f'Passenger {seat}', 'email': f'{seat.lower()}@example.com'} for seat in seats
        ],
    }


def available_seats(client, flight_id):
    return client.get(f'/flights/{flight_id}/seats').json()['available_seats']


def test_create_and_cancel_scenario(client, flight, customer, customer_headers):
    created = client.post('/bookings', json=booking_payload(flight.id), headers=customer_headers)

    assert created.status_code == 201
    booking = created.json()
    assert booking['user_id'] == customer.id
    assert booking['status'] == 'CONFIRMED'
    assert booking['seats'] == ['1A', '1B']
    assert float(booking['total_price']) == 200.0
    assert booking['qr_code'] == f'{settings.QR_CODE_URL_PREFIX}/booking_{booking["id"]}.png'
    assert os.path.exists(os.path.join(settings.QR_CODE_DIR, f'booking_{booking["id"]}.png'))

    seats = available_seats(client, flight.id)
    assert '1A' not in seats and '1B' not in seats

    cancelled = client.put(f'/bookings/{booking["id"]}/cancel', headers=customer_headers)
    assert cancelled.status_code == 200
    assert cancelled.json() == {'message': 'Booking cancelled successfully', 'booking_id': booking['id']}

    assert {'1A', '1B'} <= set(available_seats(client, flight.id))
    fetched = client.get(f'/bookings/{booking["id"]}', headers=customer_headers)
    assert fetched.json()['status'] == 'CANCELLED'


def test_double_booking_is_rejected(client, flight, customer_headers, other_customer):
    first = client.post('/bookings', json=booking_payload(flight.id, ['1A']), headers=customer_headers)
    assert first.status_code == 201

    second = client.post(
        '/bookings', json=booking_payload(flight.id, ['2A', '1A']), headers=auth_headers(other_customer)
    )
    assert second.status_code == 409
    assert second.json()['error_kind'] == 'seat_unavailable'
    assert '1A' in second.json()['detail']
    assert '2A' in available_seats(client, flight.id)


def test_booking_unknown_flight_returns_404(client, customer_headers):
    response = client.post('/bookings', json=booking_payload('missing'), headers=customer_headers)

    assert response.status_code == 404
    assert response.json()['error_kind'] == 'not_found'


def test_booking_requires_passenger_per_seat(client, flight, customer_headers):
    payload = booking_payload(flight.id)
    payload['passenger_details'] = payload['passenger_details'][:1]

    response = client.post('/bookings', json=payload, headers=customer_headers)

    assert response.status_code == 422
    assert available_seats(client, flight.id) == ['1A', '1B', '2A', '2B']


def test_booking_requires_authentication(client, flight):
    response = client.post('/bookings', json=booking_payload(flight.id))

    assert response.status_code == 401
    assert response.json()['error_kind'] == 'unauthorized'


def test_owner_and_admin_access(client, flight, customer, customer_headers, other_customer, admin_headers):
    booking_id = client.post('/bookings', json=booking_payload(flight.id), headers=customer_headers).json()['id']
    intruder = auth_headers(other_customer)

    assert client.get(f'/bookings/{booking_id}', headers=customer_headers).status_code == 200
    assert client.get(f'/bookings/{booking_id}', headers=admin_headers).status_code == 200

    forbidden = client.get(f'/bookings/{booking_id}', headers=intruder)
    assert forbidden.status_code == 403
    assert forbidden.json()['error_kind'] == 'forbidden'
    assert client.put(f'/bookings/{booking_id}/cancel', headers=intruder).status_code == 403
    assert client.get(f'/bookings/user/{customer.id}', headers=intruder).status_code == 403


def test_list_bookings(client, db, customer, customer_headers, other_customer, admin_headers):
    first_flight = make_flight(db, 'SA101')
    second_flight = make_flight(db, 'SA202', 'Anchorage', 'Denali')
    mine = client.post('/bookings', json=booking_payload(first_flight.id, ['1A']), headers=customer_headers).json()
    client.post('/bookings', json=booking_payload(second_flight.id, ['1A']), headers=auth_headers(other_customer))

    own = client.get(f'/bookings/user/{customer.id}', headers=customer_headers)
    assert own.status_code == 200
    assert [b['id'] for b in own.json()] == [mine['id']]

    assert client.get('/bookings', headers=customer_headers).status_code == 403
    everything = client.get('/bookings', headers=admin_headers)
    assert everything.status_code == 200
    assert len(everything.json()) == 2


def test_update_status_is_admin_only(client, flight, customer_headers, admin_headers):
    booking_id = client.post('/bookings', json=booking_payload(flight.id), headers=customer_headers).json()['id']

    denied = client.put(f'/bookings/{booking_id}/status', json={'status': 'PENDING'}, headers=customer_headers)
    assert denied.status_code == 403
    assert denied.json() == {'detail': 'Not enough permissions', 'error_kind': 'forbidden'}

    updated = client.put(f'/bookings/{booking_id}/status', json={'status': 'PENDING'}, headers=admin_headers)
    assert updated.status_code == 200
    assert updated.json()['status'] == 'PENDING'

    invalid = client.put(f'/bookings/{booking_id}/status', json={'status': 'LOST'}, headers=admin_headers)
    assert invalid.status_code == 422
    assert invalid.json()['error_kind'] == 'validation'


def test_cancel_after_admin_marks_booking_cancelled_frees_seats(client, flight, customer_headers, admin_headers):
    booking_id = client.post('/bookings', json=booking_payload(flight.id, ['1A']), headers=customer_headers).json()['id']

    marked = client.put(f'/bookings/{booking_id}/status', json={'status': 'CANCELLED'}, headers=admin_headers)
    assert marked.status_code == 200
    assert '1A' not in available_seats(client, flight.id)

    assert client.put(f'/bookings/{booking_id}/cancel', headers=customer_headers).status_code == 200
    assert '1A' in available_seats(client, flight.id)


def test_missing_booking_returns_404(client, customer_headers, admin_headers):
    assert client.get('/bookings/SA0000000000000ABCD', headers=customer_headers).status_code == 404
    assert client.put('/bookings/SA0000000000000ABCD/cancel', headers=customer_headers).status_code == 404

    response = client.put(
        '/bookings/SA0000000000000ABCD/status', json={'status': 'CONFIRMED'}, headers=admin_headers
    )
    assert response.status_code == 404
    assert response.json()['error_kind'] == 'not_found'


def test_qr_code_is_served_statically(client, flight, customer_headers):
    booking = client.post('/bookings', json=booking_payload(flight.id), headers=customer_headers).json()

    image = client.get(booking['qr_code'])

    assert image.status_code == 200
    assert image.headers['content-type'] == 'image/png'

"""Attendance redemption tests against the in-memory store."""
import re
import threading

import pytest

from accessx.errors import (
    AttendanceError, CryptoError, DuplicateAttendance, Forbidden, InvalidNonce,
    OutOfProximity, RecordNotFound, SessionNotFound, SessionNotStarted,
    SignatureMismatch, ValidationError, WindowExpired
)
from accessx.services.attendance_service import generate_proof_artifacts

from tests.helpers import sign

EMAIL = 'student@example.edu'


@pytest.fixture
def session(services):
    return services.sessions.create_session('CS101', '2025-01-10', start_time='09:00')


def redeem(services, session, account, email=EMAIL, **overrides):
    kwargs = dict(
        session_id=session.session_id,
        nonce=session.nonce,
        email=email,
        wallet_address=account.address,
        signature=sign(account, email, session.session_id, session.nonce)
    )
    kwargs.update(overrides)
    return services.attendance.redeem(**kwargs)


def test_proof_artifact_format():
    token_id, tx_hash = generate_proof_artifacts()
    assert re.fullmatch(r'[1-9]\d{5}', token_id)
    assert re.fullmatch(r'0x[0-9a-f]{64}', tx_hash)


def test_redeem_success_round_trip(services, session, wallet):
    record = redeem(services, session, wallet)

    assert re.fullmatch(r'\d{6}', record.token_id)
    assert record.wallet_address == wallet.address.lower()
    assert record.timestamp is not None

    found = services.queries.find_by_session_and_wallet(session.session_id, wallet.address)
    assert found.token_id == record.token_id
    assert found.tx_hash == record.tx_hash


def test_missing_fields(services, session, wallet):
    with pytest.raises(ValidationError):
        redeem(services, session, wallet, email='')
    with pytest.raises(ValidationError):
        redeem(services, session, wallet, signature=None)


def test_unknown_session(services, session, wallet):
    with pytest.raises(SessionNotFound):
        redeem(services, session, wallet, session_id='does-not-exist')


def test_wrong_nonce_fails_even_with_valid_signature(services, session, wallet):
    forged = 'f' * 24
    signature = sign(wallet, EMAIL, session.session_id, forged)

    with pytest.raises(InvalidNonce):
        redeem(services, session, wallet, nonce=forged, signature=signature)


def test_second_redemption_is_duplicate(services, session, wallet):
    redeem(services, session, wallet)

    with pytest.raises(DuplicateAttendance):
        redeem(services, session, wallet)


def test_duplicate_detected_regardless_of_address_case(services, session, wallet):
    redeem(services, session, wallet)

    with pytest.raises(DuplicateAttendance):
        redeem(services, session, wallet, wallet_address=wallet.address.lower())


def test_concurrent_redemptions_only_one_succeeds(services, session, wallet):
    attempts = 8
    barrier = threading.Barrier(attempts)
    outcomes = []
    lock = threading.Lock()
    signature = sign(wallet, EMAIL, session.session_id, session.nonce)

    def attempt():
        barrier.wait()
        try:
            redeem(services, session, wallet, signature=signature)
            result = 'ok'
        except DuplicateAttendance:
            result = 'duplicate'
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=attempt) for _ in range(attempts)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count('ok') == 1
    assert outcomes.count('duplicate') == attempts - 1
    assert len(services.queries.list_by_session(session.session_id)) == 1


@pytest.mark.parametrize('field,value', [
    ('email', 'someone-else@example.edu'),
    ('session_id', 'other-session'),
    ('nonce', 'other-nonce'),
])
def test_signature_over_different_fields_is_rejected(services, session, wallet, field, value):
    fields = {'email': EMAIL, 'session_id': session.session_id, 'nonce': session.nonce}
    fields[field] = value
    signature = sign(wallet, fields['email'], fields['session_id'], fields['nonce'])

    with pytest.raises(SignatureMismatch):
        redeem(services, session, wallet, signature=signature)


def test_signature_from_other_wallet(services, session, wallet, other_wallet):
    signature = sign(other_wallet, EMAIL, session.session_id, session.nonce)

    with pytest.raises(SignatureMismatch):
        redeem(services, session, wallet, signature=signature)


def test_malformed_signature(services, session, wallet):
    with pytest.raises(CryptoError):
        redeem(services, session, wallet, signature='0xdeadbeef')


@pytest.mark.parametrize('now,expected', [
    ('2025-01-10 08:59', SessionNotStarted),
    ('2025-01-10 09:00', None),
    ('2025-01-10 09:05', None),
    ('2025-01-10 09:10', None),
    ('2025-01-10 09:11', WindowExpired),
])
def test_time_window(services, session, wallet, clock, now, expected):
    clock.set(now)

    if expected is None:
        assert redeem(services, session, wallet).token_id
    else:
        with pytest.raises(expected):
            redeem(services, session, wallet)


def test_session_without_start_time_is_always_open(services, wallet, clock):
    session = services.sessions.create_session('Seminar', '2025-01-10')
    clock.set('2030-06-01 23:00')

    assert redeem(services, session, wallet).token_id


def test_failed_attempt_leaves_no_record(services, session, wallet, clock):
    clock.set('2025-01-10 09:30')
    with pytest.raises(WindowExpired):
        redeem(services, session, wallet)

    assert services.queries.find_by_session_and_wallet(session.session_id, wallet.address) is None


class TestProximity:

    @pytest.fixture
    def located(self, services):
        return services.sessions.create_session(
            'Lab', '2025-01-10', latitude=12.9716, longitude=77.5946
        )

    def test_nearby_student_accepted(self, services, located, wallet):
        record = redeem(services, located, wallet, latitude=12.9720, longitude=77.5950)
        assert record.student_latitude == pytest.approx(12.9720)

    def test_distant_student_rejected(self, services, located, wallet):
        with pytest.raises(OutOfProximity) as exc:
            redeem(services, located, wallet, latitude=13.0827, longitude=80.2707)
        assert 'km' in exc.value.message

    def test_location_required(self, services, located, wallet):
        with pytest.raises(ValidationError):
            redeem(services, located, wallet)

    def test_malformed_location_rejected(self, services, located, wallet):
        with pytest.raises(ValidationError):
            redeem(services, located, wallet, latitude='north', longitude=77.5950)

    def test_location_ignored_without_instructor_location(self, services, session, wallet):
        record = redeem(services, session, wallet, latitude='north', longitude=None)

        assert record.token_id
        assert record.student_latitude is None


def test_find_by_wallet_and_email_newest_first(services, wallet):
    first = services.sessions.create_session('One', '2025-01-10')
    second = services.sessions.create_session('Two', '2025-01-10')
    r1 = redeem(services, first, wallet)
    r2 = redeem(services, second, wallet)

    records = services.queries.find_by_wallet_and_email(wallet.address, EMAIL)
    assert [r.id for r in records] == [r2.id, r1.id]
    assert services.queries.find_by_wallet_and_email(wallet.address, 'nobody@example.edu') == []


def test_delete_session_cascades(services, session, wallet, other_wallet):
    redeem(services, session, wallet)
    redeem(services, session, other_wallet)

    removed = services.sessions.delete_session(session.session_id, None)

    assert removed == 2
    assert services.queries.list_by_session(session.session_id) == []


def test_delete_record_checks_owner(services, wallet, other_wallet):
    owned = services.sessions.create_session('Owned', '2025-01-10', instructor_wallet=other_wallet.address)
    record = redeem(services, owned, wallet)

    with pytest.raises(Forbidden):
        services.attendance.delete_record(record.id, wallet.address)

    services.attendance.delete_record(record.id, other_wallet.address)
    assert services.queries.find_by_session_and_wallet(owned.session_id, wallet.address) is None

    with pytest.raises(RecordNotFound):
        services.attendance.delete_record(record.id, other_wallet.address)


def test_errors_have_distinct_messages():
    errors = [SessionNotFound(), InvalidNonce(), SessionNotStarted(), WindowExpired(),
              DuplicateAttendance(), SignatureMismatch(), CryptoError()]
    assert len({e.message for e in errors}) == len(errors)
    assert all(isinstance(e, AttendanceError) for e in errors)

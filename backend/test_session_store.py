"""
Tests for the observable session state used by the CLI
"""
from app.utils.session_store import INITIAL_SESSION, SIGNED_IN, SIGNED_OUT, SessionState

SESSION = {"user_id": "u1", "email": "ana@example.com", "access_token": "tok"}


def test_initialize_publishes_initial_session():
    state = SessionState()
    events = []
    state.subscribe(lambda event, session: events.append((event, session)))

    state.initialize(lambda: SESSION)

    assert state.initialized
    assert state.is_authenticated
    assert state.user_id == "u1"
    assert events == [(INITIAL_SESSION, SESSION)]


def test_initialize_treats_errors_as_signed_out():
    def broken():
        raise ConnectionError("offline")

    state = SessionState()
    state.initialize(broken)
    assert state.initialized
    assert not state.is_authenticated


def test_sign_in_and_out_events():
    state = SessionState()
    events = []
    state.subscribe(lambda event, session: events.append(event))

    state.publish(SIGNED_IN, SESSION)
    assert state.access_token == "tok"
    state.publish(SIGNED_OUT, None)
    assert state.access_token is None
    assert events == [SIGNED_IN, SIGNED_OUT]


def test_unsubscribe_stops_delivery():
    state = SessionState()
    events = []
    unsubscribe = state.subscribe(lambda event, session: events.append(event))

    unsubscribe()
    unsubscribe()
    state.publish(SIGNED_IN, SESSION)

    assert events == []
    assert state.listener_count() == 0


def test_failing_listener_does_not_block_others():
    state = SessionState()
    events = []

    def broken(event, session):
        raise RuntimeError("boom")

    state.subscribe(broken)
    state.subscribe(lambda event, session: events.append(event))
    state.publish(SIGNED_IN, SESSION)

    assert events == [SIGNED_IN]


def test_close_drops_listeners_and_session():
    state = SessionState()
    state.subscribe(lambda event, session: None)
    state.initialize(lambda: SESSION)

    state.close()

    assert state.listener_count() == 0
    assert state.session is None
    assert not state.initialized

"""ConnectionRegistry room bookkeeping."""

from realtime.registry import Connection, ConnectionRegistry, ConnectionState


def _active(registry, *rooms):
    connection = Connection(websocket=None)
    registry.register(connection)
    for room in rooms:
        registry.join(connection, room)
    connection.state = ConnectionState.ACTIVE
    return connection


def test_members_only_include_active_connections():
    registry = ConnectionRegistry()
    a = _active(registry, "admin")
    b = _active(registry, "admin")
    b.state = ConnectionState.AUTHENTICATED

    assert registry.members("admin") == [a]
    assert registry.active() == [a]
    assert registry.members("nobody") == []


def test_unregister_cleans_empty_rooms():
    registry = ConnectionRegistry()
    a = _active(registry, "admin", "user:1")
    b = _active(registry, "admin")

    registry.unregister(a)

    assert a.state == ConnectionState.CLOSED
    assert "user:1" not in registry.rooms
    assert registry.rooms["admin"] == {b.id}
    assert len(registry) == 1

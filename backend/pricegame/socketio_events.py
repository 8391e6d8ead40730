from flask import current_app, request

from pricegame import NAMESPACE, socketio


def _game():
    return current_app.extensions['price_game']


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    _game().connect(_get_sid())


def handle_disconnect(reason=None):
    _game().disconnect(_get_sid())


def handle_message(data):
    _game().handle_message(_get_sid(), data)


def handle_error(exc):
    # Logged only; the transport closes the session if it has to
    current_app.logger.error(f"[socket-error] sid={_get_sid()} error={exc!r}")


def register_socketio_handlers() -> None:
    """Register the `/ws` handlers on the server built by the latest `init_app`.

    Called from every `create_app`; `server.on` replaces an existing handler
    for the same event, so repeated calls do not stack.
    """
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('disconnect', handle_disconnect, namespace=NAMESPACE)
    socketio.on_event('message', handle_message, namespace=NAMESPACE)
    socketio.on_error(NAMESPACE)(handle_error)

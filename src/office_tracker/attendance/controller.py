from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import (
    BreakExhausted,
    BreakNotConfirmed,
    InvalidTimeInput,
    InvalidTransition,
    OperationCancelled,
    ValidationError,
)
from .presenter import history_to_list, snapshot_to_dict


class RequestConfirmation:
    """Confirmation collaborator answered up-front by the client.

    The client sends {"confirm": true} to accept; the prompt that was asked is
    kept so a refusal can be shown and re-submitted.
    """

    def __init__(self, answer: bool):
        self.answer = answer
        self.prompt: Optional[str] = None

    def __call__(self, message: str) -> bool:
        self.prompt = message
        return self.answer


def _payload() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _confirmation() -> RequestConfirmation:
    answer = _payload().get("confirm", request.args.get("confirm", ""))
    if isinstance(answer, str):
        answer = answer.strip().lower() in {"1", "true", "yes"}
    return RequestConfirmation(bool(answer))


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def ok(snapshot, status: int = 200):
        return jsonify({"success": True, "data": snapshot_to_dict(snapshot)}), status

    def fail(message: str, status: int, **extra):
        return jsonify({"success": False, "message": message, **extra}), status

    def run(action, confirmation: Optional[RequestConfirmation] = None):
        try:
            return ok(action())
        except BreakExhausted as e:
            return fail(str(e), 409, allowed_minutes=e.allowed_minutes, used_minutes=e.used_minutes)
        except InvalidTransition as e:
            return fail(str(e), 409)
        except BreakNotConfirmed as e:
            return fail(
                str(e),
                409,
                cancelled=True,
                exceeded_minutes=e.exceeded_minutes,
                prompt=confirmation.prompt if confirmation else None,
            )
        except OperationCancelled as e:
            return fail(str(e), 409, cancelled=True, prompt=confirmation.prompt if confirmation else None)
        except InvalidTimeInput as e:
            # Edit is cancelled, previous value kept
            return fail(str(e), 400, cancelled=True)
        except ValidationError as e:
            return fail(str(e), 400)

    @app.before_request
    def rollover_check():
        service.check_rollover()

    @app.route("/api/today", methods=["GET"], endpoint="today")
    def today():
        return ok(service.snapshot())

    @app.route("/api/punch-in", methods=["POST"], endpoint="punch_in")
    def punch_in():
        return run(service.punch_in)

    @app.route("/api/punch-out", methods=["POST"], endpoint="punch_out")
    def punch_out():
        return run(service.punch_out)

    @app.route("/api/break-in", methods=["POST"], endpoint="break_in")
    def break_in():
        return run(service.break_in)

    @app.route("/api/break-out", methods=["POST"], endpoint="break_out")
    def break_out():
        confirmation = _confirmation()
        return run(lambda: service.break_out(confirm=confirmation), confirmation)

    @app.route("/api/edit", methods=["POST"], endpoint="edit_time")
    def edit_time():
        data = _payload()
        field = str(data.get("field", ""))
        value = str(data.get("value", ""))
        index = data.get("index")
        if index is not None:
            try:
                index = int(index)
            except (TypeError, ValueError):
                return fail("Break index must be a number", 400)
        return run(lambda: service.edit_time(field, value, index=index))

    @app.route("/api/breaks/<int:index>", methods=["DELETE"], endpoint="delete_break")
    def delete_break(index: int):
        confirmation = _confirmation()
        return run(lambda: service.delete_break(index, confirm=confirmation), confirmation)

    @app.route("/api/clear-today", methods=["POST"], endpoint="clear_today")
    def clear_today():
        confirmation = _confirmation()
        return run(lambda: service.clear_today(confirm=confirmation), confirmation)

    @app.route("/api/clear-all", methods=["POST"], endpoint="clear_all")
    def clear_all():
        confirmation = _confirmation()
        return run(lambda: service.clear_all(confirm=confirmation), confirmation)

    @app.route("/api/history", methods=["GET"], endpoint="history")
    def history():
        return jsonify({"success": True, "data": history_to_list(service.history())})

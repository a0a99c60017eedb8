from __future__ import annotations

from functools import wraps

import click
from flask import Flask
from flask.cli import AppGroup

from ..container import Container
from ..core.enums import EditField
from ..core.exceptions import DomainError
from .presenter import history_lines, status_lines


def register(app: Flask, container: Container) -> None:
    """`flask --app office_tracker.main tracker <command>`"""

    service = container.attendance_service
    tracker = AppGroup("tracker", help="Punch in/out, breaks and history.")

    def confirmer(yes: bool):
        if yes:
            return lambda message: True
        return lambda message: click.confirm(message, default=False)

    def reports_errors(command):
        @wraps(command)
        def wrapper(*args, **kwargs):
            try:
                snapshot = command(*args, **kwargs)
            except DomainError as e:
                click.secho(str(e), fg="yellow", err=True)
                raise click.exceptions.Exit(1)
            if snapshot is not None:
                for line in status_lines(snapshot):
                    click.echo(line)

        return wrapper

    @tracker.command("status")
    @reports_errors
    def status():
        service.check_rollover()
        return service.snapshot()

    @tracker.command("punch-in")
    @reports_errors
    def punch_in():
        return service.punch_in()

    @tracker.command("punch-out")
    @reports_errors
    def punch_out():
        return service.punch_out()

    @tracker.command("break-in")
    @reports_errors
    def break_in():
        return service.break_in()

    @tracker.command("break-out")
    @click.option("--yes", is_flag=True, help="Submit an over-limit break without asking.")
    @reports_errors
    def break_out(yes):
        return service.break_out(confirm=confirmer(yes))

    @tracker.command("edit")
    @click.argument("field", type=click.Choice([f.value for f in EditField]))
    @click.argument("value")
    @click.option("--index", type=int, default=None, help="Break number for break_start/break_end.")
    @reports_errors
    def edit(field, value, index):
        return service.edit_time(field, value, index=index)

    @tracker.command("delete-break")
    @click.argument("index", type=int)
    @click.option("--yes", is_flag=True)
    @reports_errors
    def delete_break(index, yes):
        return service.delete_break(index, confirm=confirmer(yes))

    @tracker.command("clear-today")
    @click.option("--yes", is_flag=True)
    @reports_errors
    def clear_today(yes):
        return service.clear_today(confirm=confirmer(yes))

    @tracker.command("clear-all")
    @click.option("--yes", is_flag=True)
    @reports_errors
    def clear_all(yes):
        return service.clear_all(confirm=confirmer(yes))

    @tracker.command("history")
    def history():
        service.check_rollover()
        entries = service.history()
        if not entries:
            click.echo("No history yet.")
            return
        for line in history_lines(entries):
            click.echo(line)

    app.cli.add_command(tracker)

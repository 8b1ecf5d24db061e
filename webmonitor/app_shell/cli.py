import argparse
import getpass
import logging
import os
import sys
from pathlib import Path

from webmonitor.adapters.token_storage import JsonFileStorage
from webmonitor.components.drafts import ValidateDraftInput, run_validate
from webmonitor.components.sync import ReconcileInput, SyncOperation, run_reconcile
from webmonitor.domain.entities import Project, ProjectDraft
from webmonitor.ports.api import ApiError, display_message
from webmonitor.rules.loader import load_rules
from webmonitor.ui.context import ServiceContext
from webmonitor.ui.format import alert_summary, time_ago, usage_badge

logging.basicConfig(level=logging.WARNING)
logger = logging.getLogger("cli")

RULES_PATH = os.environ.get("WEBMONITOR_RULES_PATH", "rules.yaml")


class CommandError(Exception):
    """A command could not complete; the message is printed as-is."""


def get_context() -> ServiceContext:
    if not Path(RULES_PATH).exists():
        logger.error(f"Rules file {RULES_PATH} not found.")
        sys.exit(1)

    rules = load_rules(Path(RULES_PATH))
    storage = JsonFileStorage(rules.storage.path)
    return ServiceContext.create(rules, storage)


def _password(args: argparse.Namespace) -> str:
    return args.password if args.password is not None else getpass.getpass("Password: ")


def _require_user(ctx: ServiceContext) -> str:
    ctx.session.initialize()
    user = ctx.session.user
    if user is None:
        raise CommandError("Not logged in. Run `webmonitor login` first.")
    return user.id


def _print_project(project: Project) -> None:
    print(f"{project.project_name} ({project.id})")
    print(f"  Alert email: {project.email}")
    print(f"  Usage:       {usage_badge(project.count, project.limit)} - {alert_summary(project.count)}")
    if project.limit_exceeded:
        print("  Alerts Exceeded limit")
    print(f"  API key:     {project.key}")
    print(f"  Created:     {time_ago(project.created_at)}")


def handle_login(ctx: ServiceContext, args: argparse.Namespace) -> None:
    try:
        user = ctx.session.login(args.identifier, _password(args))
    except ApiError as e:
        raise CommandError(display_message(e, "Invalid credentials")) from e
    print(f"Logged in as {user.identifier or user.id}.")


def handle_signup(ctx: ServiceContext, args: argparse.Namespace) -> None:
    try:
        ctx.session.signup(args.name, args.identifier, _password(args))
    except ApiError as e:
        raise CommandError(display_message(e, "Failed to create account. Please try again.")) from e
    print("Account created successfully. You can now log in.")


def handle_logout(ctx: ServiceContext, args: argparse.Namespace) -> None:
    ctx.session.logout()
    print("Logged out.")


def handle_whoami(ctx: ServiceContext, args: argparse.Namespace) -> None:
    ctx.session.initialize()
    user = ctx.session.user
    if user is None:
        print("Not logged in.")
        return
    print(user.identifier or user.email or user.id)


def handle_projects(ctx: ServiceContext, args: argparse.Namespace) -> None:
    user_id = _require_user(ctx)
    try:
        projects = ctx.api.list_projects(user_id)
    except ApiError as e:
        raise CommandError(display_message(e, "Failed to fetch projects.")) from e

    if not projects:
        print("No projects yet.")
        return
    for project in projects:
        marker = " !" if project.limit_exceeded else ""
        print(f"{project.id}  {project.project_name}  {usage_badge(project.count, project.limit)}{marker}")


def _fetch(ctx: ServiceContext, project_id: str) -> Project:
    _require_user(ctx)
    try:
        return ctx.api.get_project(project_id)
    except ApiError as e:
        raise CommandError("Project not found") from e


def handle_show(ctx: ServiceContext, args: argparse.Namespace) -> None:
    _print_project(_fetch(ctx, args.project_id))


def handle_create(ctx: ServiceContext, args: argparse.Namespace) -> None:
    _require_user(ctx)
    limit = args.limit if args.limit is not None else str(ctx.rules.projects.default_limit)
    draft = ProjectDraft(name=args.name, email=args.email, limit=limit)
    validation = run_validate(ValidateDraftInput(draft=draft, bounds=ctx.limit_bounds))
    if not validation.success or validation.limit is None:
        raise CommandError(validation.error or "Invalid project.")

    try:
        project = ctx.api.create_project(draft.name.strip(), draft.email.strip(), validation.limit)
    except ApiError as e:
        raise CommandError(display_message(e, "Failed to create project. Please try again.")) from e
    print(f"Created project {project.project_name} ({project.id}).")


def handle_test_alert(ctx: ServiceContext, args: argparse.Namespace) -> None:
    project = _fetch(ctx, args.project_id)
    try:
        ctx.api.report_alert(project.key)
    except ApiError as e:
        raise CommandError("Failed to send test alert.") from e

    outcome = run_reconcile(ReconcileInput(operation=SyncOperation.REPORT_ALERT, current=project))
    if outcome.project is None:
        raise CommandError("Failed to send test alert.")
    print(f"Test alert sent! Usage is now {usage_badge(outcome.project.count, outcome.project.limit)}.")


def handle_regenerate_key(ctx: ServiceContext, args: argparse.Namespace) -> None:
    project = _fetch(ctx, args.project_id)
    try:
        updated = ctx.api.regenerate_key(project.id)
    except ApiError as e:
        raise CommandError(display_message(e, "Failed to regenerate key.")) from e

    outcome = run_reconcile(
        ReconcileInput(operation=SyncOperation.REGENERATE_KEY, current=project, server=updated)
    )
    if outcome.project is None:
        raise CommandError("Failed to regenerate key.")
    print(f"New API key: {outcome.project.key}")


def handle_delete(ctx: ServiceContext, args: argparse.Namespace) -> None:
    if not args.yes:
        raise CommandError("This action cannot be undone. Re-run with --yes to confirm.")
    _require_user(ctx)
    try:
        ctx.api.delete_project(args.project_id)
    except ApiError as e:
        raise CommandError(display_message(e, "Failed to delete project.")) from e
    print(f"Deleted project {args.project_id}.")


HANDLERS = {
    "login": handle_login,
    "signup": handle_signup,
    "logout": handle_logout,
    "whoami": handle_whoami,
    "projects": handle_projects,
    "show": handle_show,
    "create": handle_create,
    "test-alert": handle_test_alert,
    "regenerate-key": handle_regenerate_key,
    "delete": handle_delete,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="webmonitor", description="WebMonitor CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # login
    login_parser = subparsers.add_parser("login", help="Log in and store the credential token")
    login_parser.add_argument("identifier", help="Email or username")
    login_parser.add_argument("--password", help="Prompted for when omitted")

    # signup
    signup_parser = subparsers.add_parser("signup", help="Create an account")
    signup_parser.add_argument("name")
    signup_parser.add_argument("identifier", help="Email or username")
    signup_parser.add_argument("--password", help="Prompted for when omitted")

    subparsers.add_parser("logout", help="Forget the stored credential token")
    subparsers.add_parser("whoami", help="Show the signed-in account")
    subparsers.add_parser("projects", help="List your projects")

    show_parser = subparsers.add_parser("show", help="Show one project")
    show_parser.add_argument("project_id")

    # create
    create_parser = subparsers.add_parser("create", help="Create a project")
    create_parser.add_argument("name", help="Project name")
    create_parser.add_argument("email", help="Alert email")
    create_parser.add_argument("--limit", help="Alert limit (defaults to the configured default)")

    alert_parser = subparsers.add_parser("test-alert", help="Send a test alert")
    alert_parser.add_argument("project_id")

    key_parser = subparsers.add_parser("regenerate-key", help="Issue a new API key")
    key_parser.add_argument("project_id")

    delete_parser = subparsers.add_parser("delete", help="Delete a project")
    delete_parser.add_argument("project_id")
    delete_parser.add_argument("--yes", action="store_true", help="Confirm deletion")

    return parser


def run(ctx: ServiceContext, args: argparse.Namespace) -> int:
    try:
        HANDLERS[args.command](ctx, args)
    except CommandError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    ctx = get_context()
    try:
        status = run(ctx, args)
    finally:
        ctx.close()
    sys.exit(status)


if __name__ == "__main__":
    main()

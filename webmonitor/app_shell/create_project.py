from collections.abc import Callable

import flet as ft

from webmonitor.ui.context import ServiceContext
from webmonitor.ui.viewmodels.create_project import CreateProjectModel


def CreateProjectButton(
    page: ft.Page,
    ctx: ServiceContext,
    on_created: Callable[[], None],
    filled: bool = False,
) -> ft.Control:
    """Button that opens the "Create new project" dialog."""
    limits = ctx.rules.projects
    model = CreateProjectModel(
        ctx.api,
        on_created=on_created,
        bounds=ctx.limit_bounds,
        default_limit=limits.default_limit,
    )

    name_field = ft.TextField(label="Project Name", hint_text="My Website")
    email_field = ft.TextField(
        label="Alert Email",
        hint_text="alerts@example.com",
        keyboard_type=ft.KeyboardType.EMAIL,
    )
    limit_field = ft.TextField(
        label="Alert Limit",
        keyboard_type=ft.KeyboardType.NUMBER,
        helper_text="Maximum number of alerts that can be sent per day",
    )
    error_text = ft.Text(color="error", visible=False)
    submit_button = ft.FilledButton("Create Project")

    def sync_fields() -> None:
        name_field.value = model.name
        email_field.value = model.email
        limit_field.value = model.limit
        error_text.value = model.error
        error_text.visible = bool(model.error)

    def close(_: ft.ControlEvent | None = None) -> None:
        model.close()
        page.close(dialog)

    def submit(_: ft.ControlEvent) -> None:
        model.name = name_field.value or ""
        model.email = email_field.value or ""
        model.limit = limit_field.value or ""

        submit_button.disabled = True
        submit_button.text = "Creating..."
        page.update()

        created = model.submit()

        submit_button.disabled = False
        submit_button.text = "Create Project"
        if created:
            sync_fields()
            page.close(dialog)
        else:
            error_text.value = model.error
            error_text.visible = True
            page.update()

    submit_button.on_click = submit

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text("Create new project"),
        content=ft.Column(
            [
                ft.Text(
                    "Create a new project to monitor your website and receive alerts when it crashes.",
                    color="onSurfaceVariant",
                ),
                error_text,
                name_field,
                email_field,
                limit_field,
            ],
            tight=True,
            width=420,
        ),
        actions=[ft.OutlinedButton("Cancel", on_click=close), submit_button],
    )

    def open_dialog(_: ft.ControlEvent) -> None:
        model.open()
        sync_fields()
        page.open(dialog)

    button_cls = ft.FilledButton if filled else ft.OutlinedButton
    return button_cls("Create Project", icon=ft.Icons.ADD, on_click=open_dialog)

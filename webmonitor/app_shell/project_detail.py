import flet as ft

from webmonitor.ui.components.project_card import UsageBadge
from webmonitor.ui.context import ServiceContext
from webmonitor.ui.format import time_ago
from webmonitor.ui.theme import AppTheme
from webmonitor.ui.viewmodels.project_detail import (
    COPY_COMMAND,
    COPY_KEY,
    ProjectDetailModel,
)

FIELD_LABELS = {"name": "Project Name", "email": "Alert Email", "limit": "Alert Limit"}


def ProjectDetailContent(page: ft.Page, ctx: ServiceContext, project_id: str) -> ft.Control:
    model = ProjectDetailModel(
        ctx.state,
        ctx.api,
        project_id,
        navigator=page,
        clipboard=page,
        scheduler=ctx.scheduler,
        report_url=ctx.rules.api.report_url,
        bounds=ctx.limit_bounds,
        copy_feedback_seconds=ctx.rules.ui.copy_feedback_seconds,
        on_deleted=lambda: page.go("/"),
    )
    root = ft.Container(padding=20, expand=True, data=model)
    selected_tab = {"index": 0}
    save_button = ft.FilledButton("Save Changes", on_click=lambda _: model.save())

    # --- Delete confirmation ---

    def close_delete(_: ft.ControlEvent | None = None) -> None:
        model.cancel_delete()
        page.close(delete_dialog)

    def confirm_delete(_: ft.ControlEvent) -> None:
        if model.confirm_delete():
            page.close(delete_dialog)

    delete_dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text("Delete Project"),
        content=ft.Text("This action cannot be undone."),
        actions=[
            ft.OutlinedButton("Cancel", on_click=close_delete),
            ft.FilledButton(
                "Delete Project",
                bgcolor="error",
                color="onError",
                on_click=confirm_delete,
            ),
        ],
    )

    def open_delete(_: ft.ControlEvent) -> None:
        model.request_delete()
        page.open(delete_dialog)

    def sync_save_button() -> None:
        save_button.text = "Saving..." if model.saving else "Save Changes"
        save_button.disabled = not model.changed or model.saving

    def on_field_change(field: str, value: str) -> None:
        # Only the save button reacts to typing; rebuilding would drop focus.
        model.set_field(field, value, notify=False)
        sync_save_button()
        save_button.update()

    # --- Sections ---

    def field_row(field: str) -> ft.Control:
        assert model.draft is not None
        value = getattr(model.draft, field)
        if model.editing:
            return ft.TextField(
                label=FIELD_LABELS[field],
                value=value,
                keyboard_type=ft.KeyboardType.NUMBER if field == "limit" else None,
                on_change=lambda e, f=field: on_field_change(f, e.control.value or ""),
            )
        return ft.Column([
            ft.Text(FIELD_LABELS[field], size=13, weight=ft.FontWeight.W_500),
            ft.Container(
                content=ft.Text(value),
                padding=10,
                bgcolor="surfaceVariant",
                border_radius=6,
                width=float("inf"),
            ),
        ], spacing=4)

    def details_tab() -> ft.Control:
        assert model.project is not None
        project = model.project
        return ft.Column([
            ft.Text("Project Information", size=18, weight=ft.FontWeight.BOLD),
            ft.Text("View and edit your project details", color="onSurfaceVariant"),
            *[field_row(f) for f in ("name", "email", "limit")],
            ft.Text("Alert Count", size=13, weight=ft.FontWeight.W_500),
            ft.Row([
                UsageBadge(project.count, project.limit),
                ft.Text("Alerts Exceeded limit", color="error", visible=model.limit_exceeded),
            ]),
        ], spacing=12)

    def copied_text(label: str) -> ft.Control:
        return ft.Text("Copied!", color=AppTheme.success, visible=model.copied.get(label, False))

    def api_tab() -> ft.Control:
        assert model.project is not None
        return ft.Column([
            ft.Text("API Key", size=18, weight=ft.FontWeight.BOLD),
            ft.Text("Use this key to authenticate API requests", color="onSurfaceVariant"),
            ft.Row([
                ft.TextField(
                    value=model.project.key,
                    read_only=True,
                    expand=True,
                    text_style=ft.TextStyle(font_family="monospace"),
                ),
                ft.IconButton(ft.Icons.COPY, on_click=lambda _: model.copy_key()),
            ]),
            copied_text(COPY_KEY),
            ft.OutlinedButton(
                "Regenerating..." if model.regenerating_key else "Regenerate Key",
                icon=ft.Icons.REFRESH,
                disabled=model.regenerating_key,
                on_click=lambda _: model.regenerate_key(),
            ),
            ft.Text("Warning: Regenerating will invalidate the old key.", color="onSurfaceVariant", size=13),
            ft.Divider(),
            ft.OutlinedButton(
                "Send Test Alert",
                disabled=model.sending_test_alert,
                on_click=lambda _: model.send_test_alert(),
            ),
            ft.Text("Triggers a test alert and increments your count.", color="onSurfaceVariant", size=13),
            ft.Divider(),
            ft.Text("API Usage Example", size=14, weight=ft.FontWeight.W_500),
            ft.Row([
                ft.Container(
                    content=ft.Text(model.sample_command, font_family="monospace", selectable=True),
                    padding=12,
                    bgcolor="surfaceVariant",
                    border_radius=6,
                    expand=True,
                ),
                ft.IconButton(ft.Icons.COPY, on_click=lambda _: model.copy_command()),
            ]),
            copied_text(COPY_COMMAND),
        ], spacing=12)

    def actions() -> ft.Control:
        if selected_tab["index"] != 0:
            return ft.Container()
        if model.editing:
            return ft.Row([
                ft.OutlinedButton("Cancel", on_click=lambda _: model.cancel_edit()),
                save_button,
            ])
        return ft.Row([
            ft.OutlinedButton("Edit Project", on_click=lambda _: model.start_edit()),
            ft.FilledButton(
                "Delete",
                icon=ft.Icons.DELETE_OUTLINE,
                bgcolor="error",
                color="onError",
                on_click=open_delete,
            ),
        ])

    def on_tab_change(e: ft.ControlEvent) -> None:
        selected_tab["index"] = e.control.selected_index
        rerender()

    def render() -> None:
        if model.loading:
            root.content = ft.Container(content=ft.ProgressRing(), alignment=ft.alignment.center)
            return

        if model.not_found or model.project is None:
            root.content = ft.Container(
                content=ft.Column([
                    ft.Text("Project not found", size=20, weight=ft.FontWeight.W_500),
                    ft.Text(
                        "The project you are looking for does not exist or you don't have access to it.",
                        color="onSurfaceVariant",
                    ),
                ], horizontal_alignment=ft.CrossAxisAlignment.CENTER),
                padding=40,
                bgcolor="surfaceVariant",
                border_radius=12,
                alignment=ft.alignment.center,
            )
            return

        project = model.project
        sync_save_button()
        root.content = ft.Column([
            ft.Row([
                ft.Column([
                    ft.Text(project.project_name, size=28, weight=ft.FontWeight.BOLD),
                    ft.Text(f"Created {time_ago(project.created_at)}", color="onSurfaceVariant"),
                ]),
                actions(),
            ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
            ft.Tabs(
                selected_index=selected_tab["index"],
                on_change=on_tab_change,
                tabs=[
                    ft.Tab(text="Project Details", content=ft.Container(details_tab(), padding=ft.padding.only(top=16))),
                    ft.Tab(text="API Integration", content=ft.Container(api_tab(), padding=ft.padding.only(top=16))),
                ],
                expand=True,
            ),
            ft.Container(
                content=ft.Row([
                    ft.Icon(ft.Icons.ERROR_OUTLINE, color="error"),
                    ft.Text(model.error, color="error"),
                ]),
                visible=bool(model.error),
                padding=10,
                border=ft.border.all(1, "error"),
                border_radius=6,
            ),
        ], expand=True, scroll=ft.ScrollMode.AUTO)

    def rerender() -> None:
        render()
        if model.notice:
            page.open(ft.SnackBar(
                ft.Text(model.notice),
                bgcolor="error" if model.notice_is_error else AppTheme.success,
            ))
            model.clear_notice()
        page.update()

    model.mount()
    render()
    model.on_change = rerender
    return root

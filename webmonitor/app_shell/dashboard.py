import flet as ft

from webmonitor.app_shell.create_project import CreateProjectButton
from webmonitor.ui.components.project_card import ProjectCard
from webmonitor.ui.context import ServiceContext
from webmonitor.ui.viewmodels.project_list import ProjectListModel


def _placeholder_cards() -> ft.Control:
    return ft.Row(
        [
            ft.Container(width=320, height=200, bgcolor="surfaceVariant", border_radius=12)
            for _ in range(3)
        ],
        wrap=True,
        spacing=20,
    )


def ProjectListContent(page: ft.Page, ctx: ServiceContext) -> ft.Control:
    model = ProjectListModel(ctx.state, ctx.api, page)
    body = ft.Column(spacing=20)

    def open_project(project_id: str) -> None:
        page.go(f"/project/{project_id}")

    def render() -> None:
        if model.loading:
            body.controls = [_placeholder_cards()]
        elif not model.projects:
            body.controls = [
                ft.Container(
                    content=ft.Column(
                        [
                            ft.Text("No projects yet", size=20, weight=ft.FontWeight.W_500),
                            ft.Text(
                                "Create your first project to start monitoring your website",
                                color="onSurfaceVariant",
                            ),
                            CreateProjectButton(
                                page, ctx, on_created=model.on_project_created, filled=True
                            ),
                        ],
                        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                    ),
                    padding=40,
                    bgcolor="surfaceVariant",
                    border_radius=12,
                    alignment=ft.alignment.center,
                )
            ]
        else:
            body.controls = [
                ft.Row(
                    [ProjectCard(p, on_open=open_project) for p in model.projects],
                    wrap=True,
                    spacing=20,
                    run_spacing=20,
                )
            ]

    def rerender() -> None:
        render()
        page.update()

    model.mount()
    render()
    model.on_change = rerender

    return ft.Container(
        content=ft.Column([
            ft.Row([
                ft.Text("Your Projects", size=28, weight=ft.FontWeight.BOLD),
                CreateProjectButton(page, ctx, on_created=model.on_project_created),
            ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
            ft.Divider(),
            body,
        ], scroll=ft.ScrollMode.AUTO),
        padding=20,
        expand=True,
        data=model,
    )

from collections.abc import Callable

import flet as ft

from webmonitor.domain.entities import Project
from webmonitor.ui.format import alert_summary, time_ago, usage_badge


def UsageBadge(count: int, limit: int) -> ft.Control:
    """count/limit pill; turns to the error color once the limit is reached."""
    exceeded = count >= limit
    return ft.Container(
        content=ft.Text(
            usage_badge(count, limit),
            size=12,
            weight=ft.FontWeight.BOLD,
            color="onError" if exceeded else "onSurface",
        ),
        bgcolor="error" if exceeded else None,
        border=None if exceeded else ft.border.all(1, "outline"),
        border_radius=ft.border_radius.all(12),
        padding=ft.padding.symmetric(horizontal=10, vertical=2),
    )


class ProjectCard(ft.Container):  # type: ignore
    """
    Summary card for one project in the collection view.
    Lifts slightly on hover.
    """

    def __init__(self, project: Project, on_open: Callable[[str], None]):
        self.project = project
        self.on_open = on_open
        super().__init__(
            content=ft.Column(
                [
                    ft.Row(
                        [
                            ft.Text(
                                project.project_name,
                                size=18,
                                weight=ft.FontWeight.BOLD,
                                overflow=ft.TextOverflow.ELLIPSIS,
                                expand=True,
                            ),
                            UsageBadge(project.count, project.limit),
                        ],
                        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                    ),
                    ft.Row(
                        [
                            ft.Icon(ft.Icons.MAIL_OUTLINE, size=14, color="onSurfaceVariant"),
                            ft.Text(project.email, size=13, color="onSurfaceVariant"),
                        ],
                        spacing=4,
                    ),
                    ft.Row(
                        [
                            ft.Icon(ft.Icons.REPORT_OUTLINED, size=16, color="onSurfaceVariant"),
                            ft.Text(alert_summary(project.count), size=13),
                        ],
                        spacing=6,
                    ),
                    ft.Text(
                        f"Created {time_ago(project.created_at)}",
                        size=12,
                        color="onSurfaceVariant",
                    ),
                    ft.FilledButton(
                        "View details",
                        icon=ft.Icons.ARROW_FORWARD,
                        on_click=lambda _: self.on_open(self.project.id),
                        width=float("inf"),
                    ),
                ],
                spacing=10,
            ),
            width=320,
            padding=20,
            border_radius=ft.border_radius.all(12),
            bgcolor="surfaceVariant",
            animate=ft.animation.Animation(200, ft.AnimationCurve.EASE_OUT),
            on_hover=self._on_hover,
            shadow=ft.BoxShadow(
                spread_radius=0,
                blur_radius=10,
                color="#1A000000",
                offset=ft.Offset(0, 4),
            ),
        )

    def _on_hover(self, e: ft.HoverEvent) -> None:
        lifted = e.data == "true"
        self.shadow.blur_radius = 20 if lifted else 10
        self.shadow.offset = ft.Offset(0, 8 if lifted else 4)
        self.update()

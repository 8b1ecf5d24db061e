import flet as ft


class AppTheme:
    """
    Centralized theme configuration for the dashboard.
    Neutral slate surfaces with an alert-red accent for exceeded limits.
    """

    font_family = "Inter"

    # Colors - Light
    primary_light = "#0f172a"  # Slate 900
    on_primary_light = "#ffffff"
    secondary_light = "#2563eb"
    background_light = "#f8fafc"
    surface_light = "#ffffff"
    error_light = "#dc2626"

    # Colors - Dark
    primary_dark = "#e2e8f0"
    on_primary_dark = "#0f172a"
    secondary_dark = "#60a5fa"
    background_dark = "#020617"
    surface_dark = "#0f172a"
    error_dark = "#f87171"

    # Status
    success = "#16a34a"

    @classmethod
    def light_theme(cls) -> ft.Theme:
        return ft.Theme(
            color_scheme=ft.ColorScheme(
                primary=cls.primary_light,
                on_primary=cls.on_primary_light,
                secondary=cls.secondary_light,
                surface=cls.surface_light,
                error=cls.error_light,
            ),
            font_family=cls.font_family,
            use_material3=True,
        )

    @classmethod
    def dark_theme(cls) -> ft.Theme:
        return ft.Theme(
            color_scheme=ft.ColorScheme(
                primary=cls.primary_dark,
                on_primary=cls.on_primary_dark,
                secondary=cls.secondary_dark,
                surface=cls.surface_dark,
                error=cls.error_dark,
            ),
            font_family=cls.font_family,
            use_material3=True,
        )

from django.apps import AppConfig


class PageEditorConfig(AppConfig):
    """Configuration for the page editor Django app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'pageeditor'
    verbose_name = 'Page editor'

from django.contrib import admin

from podsync.history.models import EpisodeAction


@admin.register(EpisodeAction)
class EpisodeActionAdmin(admin.ModelAdmin):
    """Admin page for episode actions"""

    # configuration for the list view
    list_display = ("user", "changed", "url", "action")

    # fetch the related objects for the fields in list_display
    list_select_related = ("user",)

    raw_id_fields = ("user", "subscription")

    show_full_result_count = False

from django.contrib import admin

from podsync.subscriptions.models import Subscription


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    """ Admin page for subscriptions """

    # configuration for the list view
    list_display = ('user', 'url', 'changed', 'deleted')

    # fetch the related objects for the fields in list_display
    list_select_related = ('user',)

    raw_id_fields = ('user',)

    list_filter = ('deleted',)

    show_full_result_count = False

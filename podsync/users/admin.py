from django.contrib import admin

from podsync.users.models import Device


@admin.register(Device)
class DeviceAdmin(admin.ModelAdmin):
    """ Admin page for devices """

    # configuration for the list view
    list_display = ('user', 'deviceid')

    # fetch the related objects for the fields in list_display
    list_select_related = ('user',)

    raw_id_fields = ('user',)

    search_fields = ('deviceid', 'user__username')

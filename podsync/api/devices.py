from django.db import transaction

from podsync.api.util import parsed_body, get_device_uid
from podsync.api.exceptions import BadRequest
from podsync.api.httpresponse import JsonResponse
from podsync.users.models import Device

import logging
logger = logging.getLogger(__name__)


def handle_devices(request, route, user):

    if request.method == 'GET':
        return [device.as_dict() for device in
                Device.objects.filter(user=user).order_by('id')]

    if request.method == 'POST':
        device_uid = get_device_uid(route)
        data = parsed_body(request, route.format)

        if not isinstance(data, dict):
            raise BadRequest('Invalid input: requires a JSON object')

        update_device(user, device_uid, data)
        return JsonResponse({'code': 200, 'message': 'Device updated'})

    raise BadRequest('Wrong request method')


def update_device(user, device_uid, data):
    """ Creates the device if necessary and merges data into it """

    with transaction.atomic():
        device, created = Device.objects.select_for_update()\
                                        .get_or_create(user=user, deviceid=device_uid)
        device.update_data(data)
        device.save()

    if created:
        logger.info('New device %s for user %s', device_uid, user.username)

    return device

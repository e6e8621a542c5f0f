from datetime import timedelta

from django.contrib import auth

from podsync.api.basic_auth import require_valid_user, login as session_login
from podsync.api.exceptions import MethodNotAllowed, NotFound
from podsync.api.httpresponse import JsonResponse

import logging
logger = logging.getLogger(__name__)


def handle_auth(request, route):
    """ api/2/auth/<username>/(login|logout).json """

    if request.method != 'POST':
        raise MethodNotAllowed(request.method)

    action = '/'.join(route.path.split('/')[1:])

    if action == 'logout':
        return logout(request)

    elif action == 'login':
        return login(request)

    raise NotFound('Unknown login action: {}'.format(action))


def login(request):
    """
    authenticates the user with regular http basic auth
    """
    user = require_valid_user(request)
    session_login(request, user)
    request.session.set_expiry(timedelta(days=365))
    logger.info('Login of user %s', user.username)
    return JsonResponse({'code': 200, 'message': 'Logged in!'})


def logout(request):
    """
    logs out the user. does nothing if they weren't logged in
    """
    logger.info("Logout of %s", request.user)
    auth.logout(request)
    return JsonResponse({'code': 200, 'message': 'Logged out'})

import base64
import secrets

from django.contrib.auth import get_user_model


def create_auth_string(username, password):
    pwdstr = '{0}:{1}'.format(username, password).rstrip()
    credentials = base64.b64encode(pwdstr.encode('utf-8'))
    auth_string = 'Basic ' + credentials.decode('ascii')
    return auth_string


def create_user(username=None, password=None):
    """ Create a user with random data """
    User = get_user_model()
    password = password or secrets.token_hex(5)
    username = username or 'user-' + secrets.token_hex(4)
    user = User(username=username, email=username + '@example.com')
    user.set_password(password)
    user.is_active = True
    user.save()
    return user, password

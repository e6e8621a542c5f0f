class APIException(Exception):
    """ Terminates an API request with a status code and a message """

    code = 500
    default_message = 'Internal error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def as_dict(self):
        return {'code': self.code, 'message': self.message}


class BadRequest(APIException):
    """ Malformed input, invalid URL or device ID, missing fields """

    code = 400
    default_message = 'Bad request'


class Unauthorized(APIException):
    """ Missing or invalid credentials or session """

    code = 401
    default_message = 'Unauthorized'


class NotFound(APIException):
    code = 404
    default_message = 'Not found'


class MethodNotAllowed(APIException):
    code = 405
    default_message = 'Method not allowed'

    def __init__(self, method):
        super().__init__('Invalid HTTP method: {}'.format(method))


class NotImplemented_(APIException):
    """ A recognized format or operation that is not supported """

    code = 501
    default_message = 'Not implemented yet'


class Unavailable(APIException):
    """ A recognized resource that is deliberately left out """

    code = 503
    default_message = 'Not implemented'

import json

from django.http import HttpResponse


class JsonResponse(HttpResponse):
    def __init__(self, object, status=200):
        content = json.dumps(object, ensure_ascii=True, indent=4)

        super(JsonResponse, self).__init__(
            content, content_type='application/json', status=status)


class ErrorResponse(JsonResponse):
    """ The {code, message} envelope for a terminated request """

    def __init__(self, exc):
        super(ErrorResponse, self).__init__(exc.as_dict(), status=exc.code)


class OpmlResponse(HttpResponse):
    def __init__(self, opml):
        super(OpmlResponse, self).__init__(
            opml, content_type='text/x-opml; charset=utf-8')


class TextResponse(HttpResponse):
    def __init__(self, lines):
        content = '\n'.join(list(lines) + [''])
        super(TextResponse, self).__init__(
            content, content_type='text/plain; charset=utf-8')

"""OPML importer and exporter (based on gPodder's "opml" module)

The exporter renders a list of feed URLs as a minimal OPML 1.0 document, the
importer extracts the feeds of an uploaded OPML file.
"""

import xml.dom.minidom
from xml.parsers.expat import ExpatError


class Importer(object):
    VALID_TYPES = ('rss', 'link')

    def __init__(self, content):
        """
        Parses the OPML document into the list of its feed URLs
        """
        self.urls = []

        try:
            doc = xml.dom.minidom.parseString(content)
        except ExpatError as e:
            raise ValueError(str(e)) from e

        for outline in doc.getElementsByTagName('outline'):
            url = outline.getAttribute('xmlUrl') or outline.getAttribute('url')

            if not url.strip():
                continue

            if outline.hasAttribute('type') and \
                    outline.getAttribute('type') not in self.VALID_TYPES:
                continue

            self.urls.append(url.strip())


class Exporter(object):
    """
    Helper class to export a list of feed URLs in OPML 1.0 format.
    """

    def __init__(self, title='My Feeds'):
        self.title = title

    def generate(self, urls):
        """
        Creates a XML document with one outline element per feed URL, in the
        given order.

        Returns: An OPML document as bytes
        """
        doc = xml.dom.minidom.Document()

        opml = doc.createElement('opml')
        opml.setAttribute('version', '1.0')
        doc.appendChild(opml)

        head = doc.createElement('head')
        title = doc.createElement('title')
        title.appendChild(doc.createTextNode(self.title or ''))
        head.appendChild(title)
        opml.appendChild(head)

        body = doc.createElement('body')
        for url in urls:
            outline = doc.createElement('outline')
            outline.setAttribute('type', 'rss')
            outline.setAttribute('xmlUrl', url or '')
            body.appendChild(outline)
        opml.appendChild(body)

        return doc.toprettyxml(encoding='utf-8', indent='  ')

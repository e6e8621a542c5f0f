""" This module contains abstract models that are used in multiple apps """


from django.db import models


class DeleteableModel(models.Model):
    """ A model that can be marked as deleted """

    # indicates that the object has been deleted
    deleted = models.BooleanField(default=False)

    class Meta:
        abstract = True


class ChangeTrackingModel(models.Model):
    """ A model that records when it was last changed

    The time is kept as epoch seconds because that is what clients send back
    as the "since" parameter of incremental requests.
    """

    changed = models.BigIntegerField(db_index=True)

    class Meta:
        abstract = True

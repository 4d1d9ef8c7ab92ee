from django.db import models
from django.conf import settings
from django.db.models import Q


class PropertyView(models.Model):
    """
    Dedup ledger: one row per (property, identity).

    Authenticated viewers are keyed by user, anonymous ones by the
    client-generated session id. The two keys are separate uniqueness
    domains; repeat views only refresh ``viewed_at``.
    """
    property = models.ForeignKey('Property', on_delete=models.CASCADE, related_name='view_records')
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name='property_views',
    )
    session_id = models.CharField(max_length=255, null=True, blank=True)
    # Audit only; not part of the dedup key
    ip_address = models.CharField(max_length=45, null=True, blank=True)
    viewed_at = models.DateTimeField()

    class Meta:
        db_table = 'property_views'
        ordering = ['-viewed_at']
        constraints = [
            models.UniqueConstraint(fields=['property', 'user'], name='property_view_unique_user'),
            models.UniqueConstraint(fields=['property', 'session_id'], name='property_view_unique_session'),
            models.CheckConstraint(
                condition=Q(user__isnull=True) | Q(session_id__isnull=True),
                name='property_view_single_identity',
            ),
        ]
        indexes = [
            models.Index(fields=['property'], name='property_view_property_idx'),
            models.Index(fields=['session_id'], name='property_view_session_idx'),
        ]

    def __str__(self):
        who = f"user={self.user_id}" if self.user_id else f"session={self.session_id}"
        return f'View property={self.property_id} by {who} at {self.viewed_at:%Y-%m-%d %H:%M:%S}'

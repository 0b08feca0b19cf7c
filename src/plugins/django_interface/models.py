"""
Domain → ORM for the medical record tracker.

⚑ UUID primary keys everywhere
⚑ Links between records are optional (SET_NULL), never cascading deletes
⚑ `created_at` defaults to now but may be set explicitly (imports, seeds)
"""

from __future__ import annotations

import uuid

from django.db import models
from django.utils import timezone


# ╭──────────────────────────────────────────────╮
# │ 1. Appointments                              │
# ╰──────────────────────────────────────────────╯
class Appointment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    date = models.DateTimeField(db_index=True)
    doctor_name = models.CharField(max_length=255)
    specialty = models.CharField(max_length=255, blank=True, null=True)
    medical_center = models.CharField(max_length=255, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "appointments"
        ordering = ["-date"]

    def __str__(self) -> str:
        return f"{self.doctor_name} @ {self.date:%Y-%m-%d}"


# ╭──────────────────────────────────────────────╮
# │ 2. Test results                              │
# ╰──────────────────────────────────────────────╯
class Result(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    appointment = models.ForeignKey(
        Appointment, on_delete=models.SET_NULL, null=True, blank=True, related_name="results"
    )
    test_name = models.CharField(max_length=255)
    test_type = models.CharField(max_length=255, blank=True, null=True)
    value = models.CharField(max_length=255, blank=True, null=True)
    unit = models.CharField(max_length=50, blank=True, null=True)
    reference_range = models.CharField(max_length=255, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    file_url = models.URLField(max_length=1024, blank=True, null=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "results"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.test_name


# ╭──────────────────────────────────────────────╮
# │ 3. Bills                                     │
# ╰──────────────────────────────────────────────╯
class Bill(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    appointment = models.ForeignKey(
        Appointment, on_delete=models.SET_NULL, null=True, blank=True, related_name="bills"
    )
    result = models.ForeignKey(
        Result, on_delete=models.SET_NULL, null=True, blank=True, related_name="bills"
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=8, default="USD")
    insurance_coverage = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    payment_date = models.DateTimeField(null=True, blank=True)
    payment_method = models.CharField(max_length=50, blank=True, null=True)
    receipt_url = models.URLField(max_length=1024, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "bills"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"


# ╭──────────────────────────────────────────────╮
# │ 4. Insurance policies                        │
# ╰──────────────────────────────────────────────╯
class Insurance(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    provider_name = models.CharField(max_length=255)
    policy_id = models.CharField(max_length=255)
    insurance_type = models.CharField(max_length=100, blank=True, null=True)
    price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    currency = models.CharField(max_length=8, blank=True, null=True)
    pdf_url = models.URLField(max_length=1024, blank=True, null=True)
    coverage_data = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "insurances"
        ordering = ["provider_name"]

    def __str__(self) -> str:
        return f"{self.provider_name} ({self.policy_id})"

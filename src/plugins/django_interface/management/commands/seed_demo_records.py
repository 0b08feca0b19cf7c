from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from typing import Any

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from plugins.django_interface.models import Appointment, Bill, Insurance, Result


class Command(BaseCommand):
    help = (
        "Seed demo appointments, results, bills and an insurance policy so the dashboard has data.\n"
        "WARNING: --force wipes the existing records first."
    )

    def add_arguments(self, parser) -> None:
        parser.add_argument("--currency", default="USD", help="Currency of most demo bills.")
        parser.add_argument(
            "--force",
            action="store_true",
            help="Delete existing records before seeding.",
        )

    @transaction.atomic
    def handle(self, *args: Any, **opt: Any) -> None:
        self.stdout.write(self.style.WARNING("--- SEEDING DEMO RECORDS ---"))

        if Appointment.objects.exists() and not opt["force"]:
            raise CommandError("Records already exist. Re-run with --force to replace them.")
        if opt["force"]:
            Bill.objects.all().delete()
            Result.objects.all().delete()
            Appointment.objects.all().delete()
            Insurance.objects.all().delete()

        now = timezone.now()
        currency = opt["currency"]

        # ─── appointments ──────────────────────────────────────────
        cardiology = Appointment.objects.create(
            date=now - timedelta(days=20), doctor_name="Dr. Rivera", specialty="Cardiology",
            medical_center="Central Clinic",
        )
        checkup = Appointment.objects.create(
            date=now - timedelta(days=3), doctor_name="Dr. Chen", medical_center="Family Health",
        )
        Appointment.objects.create(
            date=now + timedelta(days=10), doctor_name="Dr. Okafor", specialty="Dermatology",
        )

        # ─── results ───────────────────────────────────────────────
        lipid = Result.objects.create(
            appointment=cardiology, test_name="Lipid panel", test_type="Blood Test",
            value="190", unit="mg/dL", reference_range="<200",
        )
        Result.objects.create(test_name="Chest X-ray", test_type="Imaging", created_at=now - timedelta(days=1))

        # ─── bills ─────────────────────────────────────────────────
        Bill.objects.create(
            appointment=cardiology, amount=Decimal("150.00"), currency=currency,
            insurance_coverage=Decimal("90.00"), payment_date=now - timedelta(days=19), payment_method="card",
        )
        Bill.objects.create(
            result=lipid, amount=Decimal("80.00"), currency=currency,
            insurance_coverage=Decimal("20.00"), payment_date=now - timedelta(days=15),
        )
        Bill.objects.create(appointment=checkup, amount=Decimal("60.00"), currency=currency)
        Bill.objects.create(amount=Decimal("45.00"), currency="EUR", notes="Pharmacy abroad")

        Insurance.objects.create(provider_name="Demo Health", policy_id="DEMO-0001", insurance_type="Isapre")

        self.stdout.write(self.style.SUCCESS(
            f"Seeded {Appointment.objects.count()} appointments, {Result.objects.count()} results, "
            f"{Bill.objects.count()} bills and {Insurance.objects.count()} insurance policy."
        ))

"""Management command to reconcile pending payments with the gateway"""
from django.core.management.base import BaseCommand, CommandError

from kanisa_main_app.exceptions import ServiceUnavailableError
from payments.services import PaymentService
from payments.utils import minutes_to_cron_expression


class Command(BaseCommand):
    help = 'Expire stale pending payments and poll ZenoPay for the rest'

    def add_arguments(self, parser):
        parser.add_argument(
            '--print-cron', action='store_true',
            help='Print the crontab line for PAYMENT_SYNC_CRON_MINUTES instead of running a sweep'
        )

    def handle(self, *args, **options):
        service = PaymentService()
        interval = service.config.sync_cron_minutes

        if options['print_cron']:
            if interval <= 0:
                self.stdout.write(self.style.WARNING('Payment sync is disabled (PAYMENT_SYNC_CRON_MINUTES=0)'))
                return
            cron = minutes_to_cron_expression(interval)
            self.stdout.write(f"# runs {cron['description']}")
            self.stdout.write(f"{cron['expression']} python manage.py sync_pending_payments")
            return

        if interval <= 0:
            self.stdout.write(self.style.WARNING('Payment sync is disabled (PAYMENT_SYNC_CRON_MINUTES=0)'))
            return

        try:
            result = service.sync_pending_payments()
        except ServiceUnavailableError as e:
            raise CommandError(str(e.detail))

        if result.get('skipped'):
            self.stdout.write(self.style.WARNING('Another sync is already running, skipped'))
            return

        for error in result['errors']:
            self.stderr.write(error)

        self.stdout.write(self.style.SUCCESS(
            f"Sync completed: {result['updated']} updated, {result['expired']} expired, "
            f"{result['failed']} failed out of {result['total']} pending payments"
        ))

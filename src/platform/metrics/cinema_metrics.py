from prometheus_client import Counter, Histogram


class CinemaMetrics:
    """
    Reservation engine metrics

    Outcome labels:
    - booking: created / updated / cancelled / noop / conflict / rejected
    - schedule: created / updated / deleted / conflict / rejected
    """

    def __init__(self) -> None:
        # ========== Booking ==========
        self.booking_requests = Counter(
            'cinema_booking_requests_total',
            'Booking write requests by operation and outcome',
            ['operation', 'result'],  # operation: create/update/cancel
        )

        self.booking_duration = Histogram(
            'cinema_booking_duration_seconds',
            'Booking transaction duration including retries',
            ['operation'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        self.booked_seats = Counter(
            'cinema_booked_seats_total',
            'Seats confirmed by successful bookings',
        )

        # ========== Scheduling ==========
        self.schedule_requests = Counter(
            'cinema_schedule_requests_total',
            'Showtime write requests by operation and outcome',
            ['operation', 'result'],  # operation: create/update/delete
        )

        # ========== Transactions ==========
        self.transaction_retries = Counter(
            'cinema_transaction_retries_total',
            'Transactions retried after losing a lock race',
            ['operation'],
        )

    def record_booking(self, *, operation: str, result: str, duration: float) -> None:
        self.booking_requests.labels(operation=operation, result=result).inc()
        self.booking_duration.labels(operation=operation).observe(duration)

    def record_booked_seats(self, *, count: int) -> None:
        self.booked_seats.inc(count)

    def record_schedule(self, *, operation: str, result: str) -> None:
        self.schedule_requests.labels(operation=operation, result=result).inc()

    def record_transaction_retry(self, *, operation: str) -> None:
        self.transaction_retries.labels(operation=operation).inc()


# Global metrics instance
metrics = CinemaMetrics()

"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags contention  # Admin actions racing on one booking
  locust -f locustfile.py --tags edge        # Test bad input
  locust -f locustfile.py                    # All tests
"""

import random
import string
from locust import HttpUser, task, between, tag
from datetime import datetime, timezone, timedelta

# Shared state
BOOKING_IDS = []
CONTENDED_BOOKING_ID = None

CITIES = ["Pune", "Mumbai", "Bengaluru", "Chennai", "Hyderabad", "Goa", "Mysuru"]


def random_phone():
    return "".join(random.choices(string.digits, k=10))


def random_contact():
    name = "".join(random.choices(string.ascii_lowercase, k=6))
    return {"name": name.title(), "email": f"{name}@loadtest.example", "phone": random_phone()}


def random_booking():
    pickup, drop = random.sample(CITIES, 2)
    start = datetime.now(timezone.utc) + timedelta(hours=random.randint(2, 240))
    return {
        "serviceType": random.choice(["Cab", "Tempo Traveller", "Bus"]),
        "subServiceType": random.choice(["One Way", "Round Trip", "Airport Transfer"]),
        "sourceCity": pickup,
        "route": [{"pickup": pickup, "drop": drop}],
        "pickupDateTime": start.isoformat(),
        "dropDateTime": (start + timedelta(hours=4)).isoformat(),
        "distance": round(random.uniform(5, 600), 1),
        "contact": random_contact(),
    }


def random_driver():
    return {"name": "Driver " + random.choice(string.ascii_uppercase), "phone": random_phone()}


class ContentionUser(HttpUser):
    """
    TEST 1: Many admins acting on the same booking

    Run: locust -f locustfile.py --tags contention -u 50 -r 25 --run-time 30s

    Every request must succeed; the stored status is whichever action
    committed last.
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        if not CONTENDED_BOOKING_ID:
            resp = self.client.post("/api/bookings", json=random_booking())
            if resp.status_code == 201:
                globals()["CONTENDED_BOOKING_ID"] = resp.json()["booking"]["id"]

    @tag("contention")
    @task
    def flip_status(self):
        if not CONTENDED_BOOKING_ID:
            return
        action = random.choice(["Confirmed", "Canceled"])
        body = {"action": action}
        if action == "Confirmed":
            body["driver"] = random_driver()

        with self.client.put(f"/api/bookings/{CONTENDED_BOOKING_ID}/action",
            json=body,
            name="/api/bookings/{id}/action [contended]",
            catch_response=True
        ) as resp:
            if resp.status_code == 200:
                resp.success()
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class EdgeCaseUser(HttpUser):
    """
    TEST 2: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    def _expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def missing_contact(self):
        body = random_booking()
        del body["contact"]
        with self.client.post("/api/bookings", json=body, catch_response=True) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def short_phone(self):
        body = random_booking()
        body["contact"]["phone"] = "12345"
        with self.client.post("/api/bookings", json=body, catch_response=True) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def unknown_action(self):
        with self.client.put("/api/bookings/unknown-id/action",
            json={"action": "Approved"},
            name="/api/bookings/{id}/action [invalid]",
            catch_response=True
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def missing_booking(self):
        with self.client.get("/api/bookings/does-not-exist",
            name="/api/bookings/{id} [missing]",
            catch_response=True
        ) as resp:
            self._expect(resp, [404])

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post("/api/bookings",
            data="not json at all",
            headers={"Content-Type": "application/json"},
            catch_response=True
        ) as resp:
            self._expect(resp, [400])


class RealisticUser(HttpUser):
    """
    TEST 3: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Simulates real traffic:
      - Mostly customers creating and checking bookings
      - Admins listing and acting on bookings
      - Rare deletes
    """
    wait_time = between(1, 3)

    @task(30)
    def create_booking(self):
        resp = self.client.post("/api/bookings", json=random_booking())
        if resp.status_code == 201:
            BOOKING_IDS.append(resp.json()["booking"]["id"])

    @task(20)
    def view_booking(self):
        if BOOKING_IDS:
            self.client.get(f"/api/bookings/{random.choice(BOOKING_IDS)}",
                name="/api/bookings/{id}")

    @task(10)
    def list_bookings(self):
        self.client.get("/api/bookings")

    @task(10)
    def admin_action(self):
        if not BOOKING_IDS:
            return
        booking_id = random.choice(BOOKING_IDS)
        if random.random() < 0.8:
            body = {"action": "Confirmed", "driver": random_driver()}
        else:
            body = {"action": "Canceled"}
        self.client.put(f"/api/bookings/{booking_id}/action", json=body,
            name="/api/bookings/{id}/action")

    @task(2)
    def delete_booking(self):
        if BOOKING_IDS:
            booking_id = BOOKING_IDS.pop(random.randrange(len(BOOKING_IDS)))
            self.client.delete(f"/api/bookings/{booking_id}", name="/api/bookings/{id}")

    @task(1)
    def health_check(self):
        self.client.get("/health")

"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags duplicates   # Same email, same event, many users
  locust -f locustfile.py --tags slugs        # Same title created concurrently
  locust -f locustfile.py --tags edge         # Bad input
  locust -f locustfile.py                     # All tests
"""

import random
from datetime import datetime, timezone, timedelta
from locust import HttpUser, task, between, tag

# Shared state
EVENT_SLUGS = []
EVENT_IDS = []
RACE_EVENT_ID = None
RACE_EMAIL = "race@loadtest.example.com"


def random_email():
    return f"load_{random.randint(10000, 99999)}@loadtest.example.com"


def event_payload(title):
    day = datetime.now(timezone.utc) + timedelta(days=random.randint(1, 90))
    return {
        "title": title,
        "description": "Load test event",
        "overview": "Generated by locust",
        "image": "https://images.example.com/load.png",
        "venue": "Load Hall",
        "location": "Nowhere",
        "date": day.date().isoformat(),
        "time": random.choice(["9am", "12pm", "6:30pm", "20:15"]),
        "mode": random.choice(["online", "offline", "hybrid"]),
        "audience": "Testers",
        "organizer": "Locust",
        "agenda": ["Intro", "Main", "Wrap-up"],
        "tags": random.sample(["python", "music", "data", "web", "ml"], k=2),
    }


class DuplicateBookingUser(HttpUser):
    """
    TEST 1: Duplicate bookings - every user books the same event with the same email

    Run: locust -f locustfile.py --tags duplicates -u 100 -r 50 --run-time 30s

    After test, verify:
      SELECT COUNT(*) FROM bookings WHERE event_id = X AND email = 'race@loadtest.example.com';
    Must be exactly 1
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        global RACE_EVENT_ID
        if RACE_EVENT_ID:
            return
        resp = self.client.post(
            "/api/v1/events/",
            json=event_payload(f"Race Event {random.randint(1, 10**9)}"),
        )
        if resp.status_code == 201:
            RACE_EVENT_ID = resp.json()["id"]
            print(f"\nCreated race event {RACE_EVENT_ID}\n")

    @tag("duplicates")
    @task
    def book_same_email(self):
        if not RACE_EVENT_ID:
            return
        with self.client.post(
            "/api/v1/bookings/",
            json={"event_id": RACE_EVENT_ID, "email": RACE_EMAIL},
            catch_response=True,
        ) as resp:
            if resp.status_code in (201, 409):
                resp.success()  # exactly one 201 over the whole run
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class SlugRaceUser(HttpUser):
    """
    TEST 2: Concurrent creates with titles that collapse to the same slug

    Run: locust -f locustfile.py --tags slugs -u 50 -r 50 --run-time 20s

    Exactly one create per title succeeds; every other attempt must be 409,
    never 500.
    """
    wait_time = between(0, 0.2)

    @tag("slugs")
    @task
    def create_same_slug(self):
        title = random.choice(["Launch Party", "launch  party!", "LAUNCH-PARTY"])
        with self.client.post(
            "/api/v1/events/",
            json=event_payload(title),
            name="/api/v1/events/ [same slug]",
            catch_response=True,
        ) as resp:
            if resp.status_code in (201, 409):
                resp.success()
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - Bad input handling

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
    def invalid_event_id(self):
        with self.client.post(
            "/api/v1/bookings/",
            json={"event_id": 999999, "email": random_email()},
            catch_response=True,
        ) as resp:
            self._expect(resp, (404,))

    @tag("edge")
    @task
    def invalid_email(self):
        with self.client.post(
            "/api/v1/bookings/",
            json={"event_id": 1, "email": "not-an-email"},
            catch_response=True,
        ) as resp:
            self._expect(resp, (400,))

    @tag("edge")
    @task
    def bad_time(self):
        payload = event_payload(f"Edge {random.randint(1, 10**9)}")
        payload["time"] = random.choice(["13pm", "9:5", "25:00", "noon"])
        with self.client.post("/api/v1/events/", json=payload, catch_response=True) as resp:
            self._expect(resp, (400,))

    @tag("edge")
    @task
    def blank_agenda_item(self):
        payload = event_payload(f"Edge {random.randint(1, 10**9)}")
        payload["agenda"] = ["Intro", "   "]
        with self.client.post("/api/v1/events/", json=payload, catch_response=True) as resp:
            self._expect(resp, (400,))

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post(
            "/api/v1/bookings/",
            data="not json at all",
            catch_response=True,
        ) as resp:
            self._expect(resp, (400, 422))


class RealisticUser(HttpUser):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Simulates real traffic:
      - Mostly browsing
      - Some bookings
      - Rare creates
    """
    wait_time = between(1, 3)

    @task(50)
    def browse_events(self):
        resp = self.client.get("/api/v1/events/")
        if resp.status_code == 200:
            for event in resp.json().get("events", []):
                if event["slug"] not in EVENT_SLUGS:
                    EVENT_SLUGS.append(event["slug"])
                    EVENT_IDS.append(event["id"])

    @task(20)
    def view_event(self):
        if EVENT_SLUGS:
            slug = random.choice(EVENT_SLUGS)
            self.client.get(f"/api/v1/events/{slug}", name="/api/v1/events/{slug}")
            self.client.get(f"/api/v1/events/{slug}/similar", name="/api/v1/events/{slug}/similar")

    @task(10)
    def book_event(self):
        if EVENT_IDS:
            self.client.post(
                "/api/v1/bookings/",
                json={"event_id": random.choice(EVENT_IDS), "email": random_email()},
            )

    @task(3)
    def create_event(self):
        resp = self.client.post(
            "/api/v1/events/",
            json=event_payload(f"Event {random.randint(1, 10**9)}"),
        )
        if resp.status_code == 201:
            EVENT_SLUGS.append(resp.json()["slug"])
            EVENT_IDS.append(resp.json()["id"])

    @task(1)
    def health_check(self):
        self.client.get("/health")

"""Kitchen admin workload: pull pending orders and move them along.

Needs an admin account; credentials come from LOADTEST_ADMIN_EMAIL and
LOADTEST_ADMIN_PASSWORD (``python src/manage.py seed`` creates one).
"""

import os

from locust import HttpUser, between, task

from loadtests.helpers.response import bearer, extract_error_detail
from loadtests.helpers.state import KitchenState

_NEXT_STATUS = {"Pending": "Preparing", "Preparing": "Ready", "Ready": "Completed"}


class KitchenUser(HttpUser):
    wait_time = between(2, 5)
    weight = 1

    def on_start(self):
        self.state = KitchenState()
        resp = self.client.post(
            "/auth/login",
            json={
                "email": os.getenv("LOADTEST_ADMIN_EMAIL", "admin@canteen.local"),
                "password": os.getenv("LOADTEST_ADMIN_PASSWORD", "ChangeMe123!"),
            },
            name="POST /auth/login",
        )
        if resp.status_code == 200:
            self.state.token = resp.json()["token"]

    @task(3)
    def advance_orders(self):
        if not self.state.token:
            return
        resp = self.client.get("/orders/admin/all?limit=20", headers=bearer(self.state.token), name="GET /orders/admin/all")
        if resp.status_code != 200:
            return

        for order in resp.json()["data"]:
            next_status = _NEXT_STATUS.get(order["status"])
            if next_status is None:
                continue
            with self.client.put(
                f"/orders/{order['id']}/status",
                json={"status": next_status},
                headers=bearer(self.state.token),
                catch_response=True,
                name="PUT /orders/{id}/status",
            ) as put:
                if put.status_code != 200:
                    put.failure(f"Status update failed: {put.status_code} - {extract_error_detail(put)}")

    @task(1)
    def dashboard(self):
        if not self.state.token:
            return
        self.client.get("/orders/admin/stats", headers=bearer(self.state.token), name="GET /orders/admin/stats")

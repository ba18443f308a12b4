"""Student ordering journey.

Register -> browse menu -> fill cart -> place order -> check order history.
Steps execute in order; each depends on the previous one succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import cart_quantity, special_instructions, student_registration
from loadtests.helpers.response import bearer, extract_error_detail
from loadtests.helpers.state import StudentState


class LunchRushJourney(SequentialTaskSet):
    def on_start(self):
        self.state = StudentState()

    @task
    def register(self):
        with self.client.post(
            "/auth/register",
            json=student_registration(),
            catch_response=True,
            name="POST /auth/register",
        ) as resp:
            if resp.status_code == 201:
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Registration failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def browse_menu(self):
        with self.client.get(
            "/menu?is_available=true&limit=50",
            catch_response=True,
            name="GET /menu",
        ) as resp:
            if resp.status_code == 200:
                self.state.menu_item_ids = [item["id"] for item in resp.json()["data"]]
            else:
                resp.failure(f"Menu failed: {resp.status_code} - {extract_error_detail(resp)}")
            if not self.state.menu_item_ids:
                self.interrupt()

    @task
    def fill_cart(self):
        picks = random.sample(self.state.menu_item_ids, k=min(3, len(self.state.menu_item_ids)))
        for menu_item_id in picks:
            with self.client.post(
                "/cart/items",
                json={"menu_item_id": menu_item_id, "quantity": cart_quantity()},
                headers=bearer(self.state.token),
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Add to cart failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def place_order(self):
        with self.client.post(
            "/orders",
            json={"special_instructions": special_instructions()},
            headers=bearer(self.state.token),
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["data"]["id"])
            else:
                resp.failure(f"Place order failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def order_history(self):
        with self.client.get(
            "/orders",
            headers=bearer(self.state.token),
            catch_response=True,
            name="GET /orders",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Order history failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class StudentUser(HttpUser):
    wait_time = between(1, 3)
    tasks = [LunchRushJourney]

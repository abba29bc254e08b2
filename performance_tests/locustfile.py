"""Locust file for load testing the blog GraphQL gateway.

To run:
1. Install the load extra (`pip install -e .[load]`).
2. Run locust -f performance_tests/locustfile.py
3. Open your browser to http://localhost:8089 (or the port specified by Locust).
4. Configure the number of users, spawn rate, and host (e.g., http://localhost:8000).
5. Start Swarming.

The nested query is the interesting one: however many users are requested,
the gateway should issue one posts query and one comments query per batch
(more only when a batch exceeds the chunk size).
"""

import random
import time

from locust import HttpUser, between, events, task


@events.init_command_line_parser.add_listener
def _(parser):
    parser.add_argument(
        "--max-users-per-query",
        type=int,
        env_var="LOCUST_MAX_USERS_PER_QUERY",
        default=1000,
        help="Upper bound for the 'first' argument of the users query",
    )


NESTED_USERS_QUERY = """
    query NestedUsers($first: Int) {
        users(first: $first) {
            id
            name
            email
            posts {
                post_id
                title
                comments { comment_id description }
            }
        }
    }
"""

FLAT_USERS_QUERY = """
    query Users($first: Int) {
        users(first: $first) { id name last_name created_at }
    }
"""

CREATE_CLIENT_MUTATION = """
    mutation CreateClient($client: ClientInput!) {
        createClient(client: $client) { id name email created_at }
    }
"""


class GatewayUser(HttpUser):
    # Wait time between tasks executed by each user
    wait_time = between(1, 3)  # seconds
    graphql_endpoint = "/graphql"

    def _post_graphql(self, query: str, variables: dict, name: str):
        with self.client.post(
            self.graphql_endpoint,
            json={"query": query, "variables": variables},
            catch_response=True,
            name=name,
        ) as response:
            if response.status_code != 200:
                response.failure(
                    f"{name} failed with status {response.status_code}: {response.text}"
                )
                return None
            data = response.json()
            if data.get("errors"):
                response.failure(f"GraphQL error in {name}: {data['errors']}")
                return None
            response.success()
            return data.get("data")

    @task(1)
    def health_check(self):
        self.client.get("/health", name="App: Health Check")

    @task(5)  # Higher weight: the batched relation path
    def nested_users(self):
        upper = self.environment.parsed_options.max_users_per_query
        variables = {"first": random.randint(1, upper)}
        self._post_graphql(NESTED_USERS_QUERY, variables, "GraphQL: Nested Users")

    @task(3)
    def flat_users(self):
        self._post_graphql(
            FLAT_USERS_QUERY, {"first": random.randint(1, 50)}, "GraphQL: Users"
        )

    @task(1)  # Lower weight: writes
    def create_client(self):
        stamp = time.time()
        variables = {
            "client": {
                "name": "Locust",
                "email": f"locust-{stamp}@example.com",
                "created_at": time.strftime("%Y-%m-%dT%H:%M:%S"),
            }
        }
        data = self._post_graphql(
            CREATE_CLIENT_MUTATION, variables, "GraphQL: Create Client"
        )
        if data and not data.get("createClient", {}).get("id"):
            print(f"createClient returned no id: {data}")

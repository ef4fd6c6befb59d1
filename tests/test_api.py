"""
Integration Tests for the Segmentation API

Tests:
- Customer listing, filtering and creation
- Cluster analysis, marketing strategies and model performance
- Summary statistics
- CSV download
- Health probes
"""

import io

import pytest
from fastapi.testclient import TestClient

from mall_segmentation.exports.csv_export import read_customers_csv
from mall_segmentation.main import create_app
from mall_segmentation.store.memory_store import CustomerStore
from tests.conftest import assert_error_response

NEW_CUSTOMER = {
    "customerId": 500,
    "gender": "Female",
    "age": 30,
    "annualIncome": 55.5,
    "spendingScore": 60,
}


class TestCustomers:
    """Test /api/customers endpoints"""

    def test_list_customers(self, client):
        response = client.get("/api/customers")

        assert response.status_code == 200
        customers = response.json()
        assert len(customers) == 200
        assert set(customers[0]) == {
            "id", "customerId", "gender", "age", "annualIncome", "spendingScore", "cluster"
        }

    def test_list_empty_store(self, empty_client):
        response = empty_client.get("/api/customers")

        assert response.status_code == 200
        assert response.json() == []

    def test_filter_by_age_group(self, client):
        response = client.get("/api/customers/filtered", params={"ageGroup": "31-45"})

        assert response.status_code == 200
        ages = [c["age"] for c in response.json()]
        assert ages
        assert all(31 <= age <= 45 for age in ages)

    def test_filter_gender_case_insensitive(self, client):
        upper = client.get("/api/customers/filtered", params={"gender": "MALE"}).json()
        lower = client.get("/api/customers/filtered", params={"gender": "male"}).json()

        assert upper == lower
        assert all(c["gender"] == "Male" for c in upper)

    def test_filter_by_cluster(self, client):
        customers = client.get("/api/customers/filtered", params={"cluster": "2"}).json()

        assert len(customers) == 35
        assert {c["cluster"] for c in customers} == {2}

    def test_all_values_return_everything(self, client):
        response = client.get(
            "/api/customers/filtered",
            params={"ageGroup": "all", "gender": "all", "cluster": "-1"},
        )

        assert len(response.json()) == 200

    def test_no_match_is_empty_list(self, client):
        response = client.get("/api/customers/filtered", params={"cluster": "42"})

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.parametrize("params", [
        {"cluster": "abc"},
        {"cluster": "2.5"},
        {"ageGroup": "teen"},
        {"gender": "unknown"},
    ])
    def test_invalid_filters_rejected(self, client, params):
        response = client.get("/api/customers/filtered", params=params)

        body = assert_error_response(response, 400)
        assert body["code"] == "VALIDATION_ERROR"

    def test_create_customer(self, client):
        response = client.post("/api/customers", json=NEW_CUSTOMER)

        assert response.status_code == 201
        created = response.json()
        assert created["id"] == 201
        assert created["cluster"] is None
        assert created["annualIncome"] == 55.5
        assert len(client.get("/api/customers").json()) == 201

    def test_create_customer_with_cluster(self, client):
        response = client.post("/api/customers", json={**NEW_CUSTOMER, "cluster": 4})

        assert response.status_code == 201
        assert response.json()["cluster"] == 4

    def test_create_customer_unknown_cluster(self, client):
        response = client.post("/api/customers", json={**NEW_CUSTOMER, "cluster": 9})

        assert_error_response(response, 400)
        assert len(client.get("/api/customers").json()) == 200

    @pytest.mark.parametrize("overrides", [
        {"spendingScore": 150},
        {"gender": "Other"},
        {"age": "old"},
    ])
    def test_create_customer_invalid_body(self, client, overrides):
        response = client.post("/api/customers", json={**NEW_CUSTOMER, **overrides})

        body = assert_error_response(response, 400)
        assert body["details"]

    def test_create_customer_missing_fields(self, client):
        response = client.post("/api/customers", json={"gender": "Male"})

        assert_error_response(response, 400)


class TestClusters:
    """Test cluster endpoints"""

    def test_cluster_analysis(self, client):
        clusters = client.get("/api/clusters").json()

        assert [c["cluster"] for c in clusters] == [0, 1, 2, 3, 4]
        assert [c["id"] for c in clusters] == [1, 2, 3, 4, 5]
        assert sum(c["size"] for c in clusters) == 200
        assert clusters[4]["label"] == "Standard Customers"
        assert set(clusters[0]) == {
            "id", "cluster", "avgAge", "avgIncome", "avgSpending", "size", "color", "label", "description"
        }

    def test_cluster_analysis_unaffected_by_new_customers(self, client):
        before = client.get("/api/clusters").json()

        client.post("/api/customers", json={**NEW_CUSTOMER, "cluster": 1})

        assert client.get("/api/clusters").json() == before

    def test_filtered_cluster_analysis(self, client):
        women = client.get("/api/customers/filtered", params={"gender": "female"}).json()

        clusters = client.get("/api/clusters/filtered", params={"gender": "female"}).json()

        assert sum(c["size"] for c in clusters) == len(women)
        # Recomputed summaries use the generic catalog labels
        assert all(c["label"] == "Other" for c in clusters if c["cluster"] == 4)

    def test_filtered_cluster_analysis_rejects_bad_filters(self, client):
        response = client.get("/api/clusters/filtered", params={"cluster": "x"})

        assert_error_response(response, 400)

    def test_marketing_strategies(self, client):
        strategies = client.get("/api/marketing-strategies").json()

        assert [s["cluster"] for s in strategies] == [0, 1, 2, 3, 4]
        assert strategies[3]["title"] == "Premium Customers"
        assert len(strategies[3]["strategies"]) == 3

    def test_model_performance(self, client):
        performance = client.get("/api/model-performance").json()

        assert performance["elbowData"][0] == {"k": 1, "sse": 500}
        assert [p["k"] for p in performance["elbowData"]] == list(range(1, 11))
        assert [p["k"] for p in performance["silhouetteData"]] == list(range(2, 11))
        best = max(performance["silhouetteData"], key=lambda p: p["score"])
        assert best == {"k": 5, "score": 0.55}


class TestSummary:
    """Test /api/summary"""

    def test_summary(self, client, seeded_store):
        summary = client.get("/api/summary").json()

        expected = seeded_store.summary()
        assert summary == {
            "totalCustomers": 200,
            "avgIncome": expected.avg_income,
            "avgSpending": expected.avg_spending,
            "totalClusters": 5,
        }

    def test_summary_counts_new_customers(self, client):
        client.post("/api/customers", json=NEW_CUSTOMER)

        assert client.get("/api/summary").json()["totalCustomers"] == 201

    def test_empty_summary(self, empty_client):
        response = empty_client.get("/api/summary")

        assert response.status_code == 200
        assert response.json() == {
            "totalCustomers": 0,
            "avgIncome": 0.0,
            "avgSpending": 0.0,
            "totalClusters": 0,
        }


class TestDownloadCSV:
    """Test /api/download-csv"""

    def test_download_headers(self, client):
        response = client.get("/api/download-csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"] == 'attachment; filename="Mall_Customers.csv"'

    def test_download_full_dataset(self, client, seeded_store):
        response = client.get("/api/download-csv")

        lines = response.text.splitlines()
        assert lines[0] == "ID,Customer ID,Gender,Age,Annual Income,Spending Score,Cluster"
        assert len(lines) == 201
        assert read_customers_csv(io.StringIO(response.text)) == seeded_store.list_customers()

    def test_download_filtered(self, client):
        response = client.get("/api/download-csv", params={"cluster": "1"})

        lines = response.text.splitlines()
        assert len(lines) == 23
        assert all(line.endswith(",1") for line in lines[1:])

    def test_download_includes_unassigned_customer(self, client):
        client.post("/api/customers", json=NEW_CUSTOMER)

        last = client.get("/api/download-csv").text.splitlines()[-1]

        assert last == "201,500,Female,30,55.5,60.0,"

    def test_download_rejects_bad_filters(self, client):
        response = client.get("/api/download-csv", params={"ageGroup": "0-10"})

        assert_error_response(response, 400)


class TestHealth:
    """Test health endpoints"""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_liveness(self, client):
        assert client.get("/health/live").json() == {"status": "alive"}

    def test_ready(self, client):
        response = client.get("/health/ready")

        assert response.status_code == 200
        body = response.json()
        assert body["customers"] == 200
        assert body["clusters"] == 5

    def test_not_ready_when_empty(self, empty_client):
        response = empty_client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "not_ready"

    def test_ready_without_cluster_assignments(self, test_settings):
        """A raw Kaggle file has no Cluster column but is still served"""
        kaggle = (
            "CustomerID,Genre,Age,Annual Income (k$),Spending Score (1-100)\n"
            "1,Male,19,15,39\n"
        )
        store = CustomerStore(read_customers_csv(io.StringIO(kaggle)))
        client = TestClient(create_app(settings=test_settings, store=store))

        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["customers"] == 1
        assert response.json()["clusters"] == 0

    def test_metrics_disabled(self, client):
        assert_error_response(client.get("/metrics"), 404)

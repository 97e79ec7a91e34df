"""
Integration tests for the museum proxy endpoints.

`requests.Session.get` is patched, so the proxy runs end to end without
reaching the museum.
"""

import pytest
import requests
from django.urls import reverse
from rest_framework import status

SUNFLOWERS = {"objectID": 436524, "title": "Sunflowers"}


@pytest.fixture
def met_get(mocker):
    return mocker.patch("museum.client.requests.Session.get")


def reply(mocker, payload=None, status_code=200):
    response = mocker.Mock(ok=200 <= status_code < 300, status_code=status_code)
    response.json.return_value = payload
    return response


class TestObject:
    def test_found(self, api_client, met_get, mocker):
        met_get.return_value = reply(mocker, SUNFLOWERS)

        response = api_client.get(reverse("met-object", kwargs={"object_id": 436524}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == SUNFLOWERS

    def test_not_found(self, api_client, met_get, mocker):
        met_get.return_value = reply(mocker, None, 404)

        response = api_client.get(reverse("met-object", kwargs={"object_id": 1}))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {"error": "Object not found"}

    def test_upstream_failure(self, api_client, met_get):
        met_get.side_effect = requests.ConnectionError("unreachable")

        response = api_client.get(reverse("met-object", kwargs={"object_id": 1}))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {"error": "Failed to fetch object"}


class TestSearch:
    def test_defaults(self, api_client, met_get, mocker):
        met_get.return_value = reply(mocker, {"total": 1, "objectIDs": [436524]})

        response = api_client.get(reverse("met-search"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["objectIDs"] == [436524]
        assert met_get.call_args.kwargs["params"] == {"q": "*", "hasImages": "true"}

    def test_query_passed_through(self, api_client, met_get, mocker):
        met_get.return_value = reply(mocker, {"total": 0, "objectIDs": None})

        api_client.get(reverse("met-search"), {"q": "sunflowers", "hasImages": "false"})

        assert met_get.call_args.kwargs["params"] == {
            "q": "sunflowers",
            "hasImages": "false",
        }

    def test_failure_degrades_to_empty_result(self, api_client, met_get):
        met_get.side_effect = requests.Timeout("slow")

        response = api_client.get(reverse("met-search"), {"q": "sunflowers"})

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"error": "Search failed", "objectIDs": []}


class TestPeriod:
    def test_found(self, api_client, met_get, mocker):
        met_get.return_value = reply(mocker, {"total": 2, "objectIDs": [1, 2]})

        response = api_client.get(
            reverse("met-period"), {"departmentIds": "11", "dateBegin": 1800, "dateEnd": 1900}
        )

        assert response.status_code == status.HTTP_200_OK
        params = met_get.call_args.kwargs["params"]
        assert params["dateBegin"] == 1800
        assert params["hasImages"] == "true"

    def test_nothing_found(self, api_client, met_get, mocker):
        met_get.return_value = reply(mocker, None, 404)

        response = api_client.get(reverse("met-period"))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {"error": "No objects found"}

    def test_upstream_failure(self, api_client, met_get):
        met_get.side_effect = requests.ConnectionError("unreachable")

        response = api_client.get(reverse("met-period"))

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR

    def test_bad_department_ids(self, api_client, met_get):
        response = api_client.get(reverse("met-period"), {"departmentIds": "11;drop"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        met_get.assert_not_called()


class TestBatch:
    def test_returns_found_objects(self, api_client, met_get, mocker):
        def fake_get(url, **kwargs):
            if url.endswith("/436524"):
                return reply(mocker, SUNFLOWERS)
            return reply(mocker, None, 404)

        met_get.side_effect = fake_get

        response = api_client.post(
            reverse("met-batch"), {"ids": [436524, 1]}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == [SUNFLOWERS]

    @pytest.mark.parametrize("body", [{}, {"ids": []}, {"ids": "436524"}, {"ids": [0]}])
    def test_invalid_ids(self, api_client, met_get, body):
        response = api_client.post(reverse("met-batch"), body, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {"error": "Invalid object IDs"}
        met_get.assert_not_called()

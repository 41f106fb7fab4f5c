from unittest.mock import MagicMock, patch

import pytest
import requests

from paintmatch.src.color_matching.catalog import load_catalog


def test_load_catalog_url_success():
    with patch("requests.get") as mock_get:
        mock_response = MagicMock()
        mock_response.text = "brand,name,type,color_hex\nCitadel,Calgar Blue,layer,#4272B8\n"
        mock_response.raise_for_status.return_value = None
        mock_get.return_value = mock_response

        url = "https://example.com/catalogs/paints.csv?version=2"
        entries = load_catalog(url)

        mock_get.assert_called_once_with(url, timeout=10)
        assert len(entries) == 1
        assert entries[0].name == "Calgar Blue"
        assert entries[0].color_hex == "#4272B8"


def test_load_catalog_url_failure():
    with patch("requests.get") as mock_get:
        mock_response = MagicMock()
        mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError("404 Client Error")
        mock_get.return_value = mock_response

        with pytest.raises(requests.exceptions.HTTPError):
            load_catalog("http://example.com/nonexistent.json")

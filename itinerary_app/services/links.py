"""
Map deep links for the amap and baidu map apps.
"""
from enum import Enum
from urllib.parse import quote


class MapProvider(str, Enum):
    AMAP = "amap"
    BAIDU = "baidu"


MAP_URL_TEMPLATES = {
    MapProvider.AMAP: "https://uri.amap.com/search?keyword={query}",
    MapProvider.BAIDU: "http://api.map.baidu.com/geocoder?address={query}&output=html&src=webapp.travel_app",
}

# Characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_query(text: str) -> str:
    return quote(text, safe=_URI_COMPONENT_SAFE)


def build_map_url(provider: MapProvider, address: str) -> str:
    """Deep link that opens the given map app searching for address."""
    return MAP_URL_TEMPLATES[MapProvider(provider)].format(query=encode_query(address))


def map_links(address: str) -> dict[str, str]:
    return {provider.value: build_map_url(provider, address) for provider in MapProvider}

from shapebridge.adapters.http.assets import AssetFetchError, AssetFetcher

__all__ = ["AssetFetchError", "AssetFetcher"]

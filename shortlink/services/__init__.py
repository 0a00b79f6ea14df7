from shortlink.services.url_shortener_service import UrlShortenerService


__all__ = ['UrlShortenerService']

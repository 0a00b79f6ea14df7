from shortlink.utils.config import app_env, app_name, project_root, app_prefix, config_path, load_config
from shortlink.utils.helpers import get_short_url, utc_now
from shortlink.utils.shortener import generate_shortcode
from shortlink.utils.domains import extract_domain, rank_domains
from shortlink.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'extract_domain',
    'rank_domains',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'config_path',
    'load_config',
    'get_short_url',
    'utc_now',
    'initialize_logging',
]

from .seo_checker import analyze_seo
from .adsense_checker import analyze_adsense
from .static_site_checker import analyze_static_site, detect_platform
from .content_analyzer import analyze_content
from .humanizer import humanize
from .fetcher import fetch_page
from .document import parse_html

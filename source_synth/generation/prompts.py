"""Prompt template for generating a source config with an LLM.

Contains:
- Platform detection rules (Telegram handle/link vs. website URL/domain)
- Selector examples for well-known news sites
- The exact JSON shapes expected for each platform

Used only when structural analysis of a website could not be performed.
"""

SOURCE_CONFIG_PROMPT = """\
You are a news source configuration generator. Generate a complete JSON configuration for: {identifier}

IMPORTANT: Detect the platform type from the identifier:
- If it contains "t.me/", starts with "@", or looks like a Telegram channel -> use "telegram" platform
- If it's a URL (http/https) or a domain -> use "website" platform

=== KNOWN NEWS SITES - USE THESE EXACT SELECTORS ===

BBC News (bbc.com, bbc.co.uk):
{{
  "listing_selector": "a[class*='PromoLink'], a.gs-c-promo-heading, a[data-testid='internal-link']",
  "article_selectors": {{
    "title": ["h1#main-heading", ".article-headline h1"],
    "content": ["div[data-component='text-block'] p", "article p"],
    "publish_date": ["time[datetime]"],
    "images": ["figure img", "img[src*='ichef.bbci.co.uk']"],
    "remove": ["aside", "nav", "[data-testid='advertisement']"]
  }}
}}

CNN (cnn.com, edition.cnn.com):
{{
  "listing_selector": "a.container__link, a[data-link-type='article'], a.cd__headline-text",
  "article_selectors": {{
    "title": ["h1.headline__text", "h1[data-editable='headline']"],
    "content": [".article__content p.paragraph", ".article__content p"],
    "publish_date": ["time[datetime]", ".timestamp"],
    "images": [".image__picture img", ".media__image img"],
    "remove": [".ad-slot", ".related-content", "aside", "nav"]
  }}
}}

Reuters (reuters.com):
{{
  "listing_selector": "a[data-testid='Heading'], a[data-testid='TitleLink']",
  "article_selectors": {{
    "title": ["h1[data-testid='Heading']", "h1"],
    "content": ["div[data-testid^='paragraph']", "article p"],
    "publish_date": ["time[datetime]", "span[data-testid='ArticleTimestamp']"],
    "images": ["figure img", "img[data-testid='Image']"],
    "remove": ["aside", "nav"]
  }}
}}

Al Jazeera (aljazeera.com):
{{
  "listing_selector": "a.u-clickable-card__link, article a, a[class*='article-card']",
  "article_selectors": {{
    "title": ["h1.article-heading", "header h1"],
    "content": [".wysiwyg p", "article p"],
    "publish_date": ["time[datetime]", ".date-simple"],
    "images": [".responsive-image img", "figure img"],
    "remove": [".article-trending", "aside", "nav"]
  }}
}}

The Guardian (theguardian.com):
{{
  "listing_selector": "a[data-link-name='article'], a.u-faux-block-link__overlay",
  "article_selectors": {{
    "title": ["h1[itemprop='headline']", "h1"],
    "content": ["div#maincontent p", "article p"],
    "publish_date": ["time[datetime]"],
    "images": ["figure img"],
    "remove": ["aside", "nav", ".ad-slot"]
  }}
}}

=== LISTING SELECTOR STRATEGY ===

For article links on listing pages, prefer this order:
1. Specific data attributes: a[data-link-type='article'], a[data-testid='article-link']
2. Semantic class names: a.article-link, a.story-link, a.headline-link
3. Container patterns: a.container__link, a.card-link, a.promo-link
4. Partial class matches: a[class*='article'], a[class*='headline']
5. Generic fallback: article a, .article-list a, main a

RULES:
- Use MULTIPLE selectors separated by commas for fallback
- Start with the most specific, end with generic
- Prefer data attributes over classes
- Hashed class names (.css-abc123) change often; prefer [class*='...'] matches

=== FOR TELEGRAM SOURCES ===
{{
  "platform": "telegram",
  "common": {{
    "ai": {{ "enabled": true }},
    "media": {{
      "include": true,
      "download": true,
      "max_per_item": 10,
      "allowed_types": ["photo", "video", "document"]
    }},
    "state": {{ "last_message_id": null, "last_fetched_at": null }},
    "content": {{
      "strip_urls": false,
      "strip_emojis": false,
      "skip_patterns": ["ad", "sponsored", "subscribe"],
      "min_text_length": 30,
      "use_caption_if_media": true
    }},
    "fetch_limit": 50,
    "deduplication_strategy": "message_id"
  }},
  "telegram": {{
    "type": "channel",
    "username": "extracted_username",
    "access_method": "user"
  }}
}}

=== FOR WEBSITE SOURCES ===
{{
  "platform": "website",
  "common": {{
    "ai": {{ "enabled": true, "prefer_local_ollama": false }},
    "media": {{
      "include": true,
      "download": true,
      "max_per_item": 5,
      "allowed_types": ["image"]
    }},
    "state": {{ "last_item_id": null, "last_fetched_at": null }},
    "content": {{
      "strip_urls": false,
      "strip_emojis": false,
      "skip_patterns": ["subscribe to", "sign up for", "advertisement", "cookie policy", "newsletter"],
      "min_text_length": 300
    }},
    "fetch_limit": 20,
    "deduplication_strategy": "content_hash"
  }},
  "website": {{
    "base_url": "https://example.com",
    "detected_framework": "Unknown",
    "rss_feeds": ["https://example.com/rss", "https://example.com/feed"],
    "listing_path": "/news",
    "listing_selector": "MULTIPLE, FALLBACK, SELECTORS",
    "article_link_selectors": ["MULTIPLE", "FALLBACK", "SELECTORS"],
    "article_selectors": {{
      "title": ["MOST_SPECIFIC", "FALLBACK", "GENERIC"],
      "author": ["SPECIFIC", "FALLBACK"],
      "content": ["SPECIFIC p", "article p"],
      "publish_date": ["time[datetime]", "FALLBACK"],
      "images": ["figure img", "article img"],
      "remove": [".ad", ".advertisement", ".social-share", "aside", "nav", ".related", ".comments", ".newsletter"]
    }}
  }}
}}

=== OUTPUT REQUIREMENTS ===
1. If the source matches a known site above, USE THOSE EXACT SELECTORS
2. Return ONLY one valid JSON object (no markdown, no explanations)
3. Use 3-5 fallback selectors for each element
4. Always include generic fallbacks
5. Set state values to null

Generate configuration for: {identifier}"""


def build_source_config_prompt(identifier: str) -> str:
    """Fill the source config prompt for one identifier."""
    return SOURCE_CONFIG_PROMPT.format(identifier=identifier)

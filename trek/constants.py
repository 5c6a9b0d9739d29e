"""
Selector, keyword and pattern tables shared by the removal, scoring and
standardization stages.
"""

# --- Clutter removal: exact tier ---

# Removed wherever they appear, regardless of attributes
EXACT_REMOVE_TAGS = ['script', 'style', 'nav', 'footer', 'header', 'aside', 'noscript']

# Containers inspected by the class check and by the partial tier
CANDIDATE_TAGS = ['div', 'section', 'article', 'main', 'span', 'p', 'ul', 'ol', 'li',
                  'h1', 'h2', 'h3', 'h4', 'h5', 'h6']

# Whole class tokens that mark a container as clutter
EXACT_REMOVE_CLASSES = ['navigation', 'sidebar']


# --- Clutter removal: partial tier ---

# Attributes whose values are matched against PARTIAL_SELECTORS
TEST_ATTRIBUTES = ['id', 'class', 'data-test', 'data-testid', 'data-test-id', 'data-qa', 'data-cy']

# Lower-case substrings; a hit on any test attribute removes the element
PARTIAL_SELECTORS = [
    # ads
    'advert', 'ad-container', 'ad-slot', 'ad-wrapper', 'ad-banner', 'adsense',
    'sponsor', 'promo', 'outbrain', 'taboola',
    # social / sharing
    'social', 'share', 'follow-us',
    # related / recommended links
    'related', 'recommend', 'trending', 'more-stories', 'read-next',
    # comments
    'comment', 'disqus',
    # sign-up and consent overlays
    'newsletter', 'subscribe', 'signup', 'cookie', 'consent', 'popup', 'modal',
    # page chrome
    'breadcrumb', 'pagination', 'menu', 'toolbar', 'skip-link',
]


# --- Content scoring ---

CONTENT_INDICATORS = ['article', 'content', 'post', 'entry', 'story', 'main']

NAVIGATION_INDICATORS = ['navigation', 'menu', 'breadcrumb', 'sidebar', 'pagination']

NON_CONTENT_PATTERNS = ['advertisement', 'sponsored', 'cookie', 'subscribe', 'newsletter',
                        'share this', 'related posts']

# class substrings used by score_by_attributes
CONTENT_CLASS_HINTS = ['content', 'article', 'post', 'entry']
NAVIGATION_CLASS_HINTS = ['nav', 'menu', 'sidebar', 'comment']
CONTENT_ID_HINTS = ['content', 'main']
NAVIGATION_ID_HINTS = ['nav', 'sidebar']


# --- Standardization ---

# A div whose class contains one of these is kept when flattening wrappers
SEMANTIC_CLASSES = ['article', 'content', 'footnote', 'reference', 'bibliography']

# Attributes that mark a div as meaningful on their own
SEMANTIC_ATTRIBUTES = ['role', 'aria-label', 'itemscope']

HEADING_TAGS = ['h1', 'h2', 'h3', 'h4', 'h5', 'h6']

# Attributes kept on headings and images by strip_unwanted_attributes
HEADING_KEEP_ATTRIBUTES = ['id', 'class']
IMAGE_KEEP_ATTRIBUTES = ['src', 'srcset', 'alt', 'width', 'height']


# --- Pipeline ---

# Below this many words the generic path retries without clutter removal
MIN_WORD_COUNT = 200

# Images smaller than this in either dimension are skipped by the image fallback
MIN_IMAGE_DIMENSION = 50
# Missing or unparseable dimensions default to this value
DEFAULT_IMAGE_DIMENSION = 100

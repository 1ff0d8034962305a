from types import MappingProxyType

DEFAULT_CATEGORY_NAME = 'Uncategorized'

# Topic label -> substrings that signal the topic in raw post text.
# Order matters: the first topic matching a category name wins.
KEYWORD_SETS = MappingProxyType({
    'quotes': (
        '"', '“', '”', 'said ', 'says ', 'quote', 'quotes', 'saying', 'wisdom',
        'inspirational', 'motivational', 'words', 'phrase', 'proverb', 'famous', 'speech',
        'cited', 'told', 'statement', 'words of wisdom'
    ),
    'automation tools': (
        'tool', 'automation', 'script', 'app ', 'platform', 'software', 'bot', 'workflow',
        'efficiency', 'productivity', 'code', 'programming', 'tech'
    ),
    'career tips': (
        'job', 'career', 'work', 'interview', 'resume', 'hire', 'hiring', 'professional',
        'promotion', 'workplace', 'skills', 'networking', 'leadership', 'management', 'salary',
        'negotiation', 'job search', 'cv', 'linkedin', 'professional development', 'mentorship',
        'coaching'
    ),
    'interesting reads': (
        'read', 'article', 'blog', 'post', 'interesting', 'fascinating', 'story', 'book',
        'novel', 'publication', 'magazine', 'journal'
    ),
    'content ideas': (
        'idea', 'content', 'blog', 'post', 'article', 'write', 'writing', 'topic',
        'inspiration', 'creative', 'create', 'concept'
    ),
    'job opportunities': (
        'hiring', 'looking for', 'seeking', 'recruiting', 'job opening', 'position available',
        'we are hiring', 'join our team', 'apply now', 'intern', 'internship', 'full-time',
        'part-time', 'remote', 'on-site', 'contract', 'freelance', 'opportunity', 'vacancy',
        'talent', 'candidate', 'role', 'dm me', 'send resume', 'cv', 'portfolio', 'opening',
        'job search', 'employment', 'work opportunity', 'join us'
    ),
    'general knowledge': (
        'fact', 'trivia', 'knowledge', 'learn', 'know', 'education', 'history', 'science',
        'culture', 'information', 'data', 'study', 'research', 'discover', 'interesting fact',
        'did you know'
    ),
})

# Default taxonomy used when an import does not ship its own categories
DEFAULT_BOOKMARK_CATEGORIES = [
    {
        'id': 1,
        'name': 'Content Ideas',
        'description': 'Posts that spark ideas for blog posts, threads, videos or other content.'
    },
    {
        'id': 2,
        'name': 'Automation Tools',
        'description': 'Apps, scripts, bots and platforms that automate work or boost productivity.'
    },
    {
        'id': 3,
        'name': 'Interesting Reads',
        'description': 'Articles, long threads, stories and books worth reading later.'
    },
    {
        'id': 4,
        'name': 'Career Tips',
        'description': 'Advice on interviews, resumes, promotions, leadership and professional growth.'
    },
    {
        'id': 5,
        'name': 'Job Opportunities',
        'description': 'Open roles, hiring announcements, internships and freelance gigs.'
    },
    {
        'id': 6,
        'name': 'Good Quotes',
        'description': 'Memorable quotes, sayings and words of wisdom.'
    },
    {
        'id': 7,
        'name': 'Knowledge/Trivia',
        'description': 'Facts, trivia, history and science tidbits.'
    },
    {
        'id': 8,
        'name': 'Uncategorized',
        'description': 'Bookmarks that do not fit any other category.'
    }
]

# Statistical scorer boosts
TOPIC_KEYWORD_BOOST = 3.0
QUOTE_MARK_BOOST = 5.0
LONG_TEXT_BOOST = 2.0
LONG_TEXT_THRESHOLD = 500
QUOTE_MARKS = ('"', '“', '”')
LONG_READ_MARKERS = ('read', 'article', 'interesting')

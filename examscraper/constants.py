"""
Constants and configuration values for the FreeCram exam scraper.

This module centralizes selectors, regex patterns, sentinel strings and
message templates so the scraping stages and the CLI share one source.
"""

# Default listing page used when no URL is supplied
DEFAULT_URL = "https://www.freecram.net/torrent/Salesforce.Agentforce-Specialist.v2025-09-22.q27.html"

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Scraping Configuration Constants (milliseconds)
TIMEOUTS = {
    'listing_page': 60000,
    'network_idle': 60000,
    'listing_selector': 10000,
    'listing_fallback_wait': 5000,
    'detail_page': 30000,
    'content_marker': 15000
}

SCRAPING_DELAY_MS = 350

BROWSER_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-web-security',
    '--disable-blink-features=AutomationControlled'
]

WINDOW_SIZES = {
    'listing': {'width': 1920, 'height': 1080},
    'detail': {'width': 1200, 'height': 800}
}

# Listing page selectors
LISTING_SELECTORS = {
    'container': 'dl.barlist',
    'text_marker_candidates': ['dl', 'div', 'section'],
    'structural_candidates': 'dl',
    'question_link': 'dd a[href*="/question/"]',
    'entry': 'dd',
    'entry_link': 'a'
}

LISTING_TEXT_MARKER = 'Question 1:'

# Detail page selectors
QA_SELECTORS = {
    'content_marker': '.qa',
    'question': '.qa-question',
    'options': '.qa-options',
    'option_label': 'p label',
    'answer_explanation': '.qa-answerexp'
}

# Text Processing Patterns
TEXT_PATTERNS = {
    'question_number': r'^\s*Question\s*(\d+):',
    'question_prefix': r'^\s*Question\s*\d+:\s*',
    'inline_span': r'<span.*?</span>',
    'whitespace': r'\s+',
    'correct_answer': r'Correct Answer:\s*([A-Z, ]+)',
    'trailing_separator': r',\s*$'
}

# Sentinel values written into QA records
NOT_AVAILABLE = 'N/A'
QUESTION_MISSING = 'N/A (Question Missing)'
ERROR_QUESTION_TEXT = 'ERROR: Could not load or find content.'

ERROR_MESSAGE_MAX_LENGTH = 100

# File Paths and Names
DEFAULT_PATHS = {
    'config_file': 'config/settings.json',
    'links_file': 'scraped_links.txt',
    'qa_file': 'scraped_questions_answers.json',
    'log_file': 'logs/scraper.log',
    'output_dir': '.'
}

# CSV column structure for exported QA data; option columns are inserted
# between Question and Answer at export time
CSV_COLUMNS = {
    'leading': ['QuestionNumber', 'Question'],
    'option_prefix': 'Option',
    'trailing': ['Answer', 'URL']
}

SEPARATOR_WIDTH = 80

MESSAGES = {
    'cli_header': '🤖 FREECRAM QUESTIONS SCRAPER',
    'stage_1_start': 'STAGE 1: STARTING LINK EXTRACTION...',
    'stage_2_start': 'STAGE 2: STARTING DEEP CONTENT SCRAPING...',
    'process_completed': 'PROCESS COMPLETED',
    'init_browser': 'Initializing headless browser for link extraction...',
    'extract_links': 'Extracting links and titles...',
    'links_found': 'Found {count} links.',
    'no_deep_links': 'No links provided for deep scraping.',
    'deep_start': 'Starting deep content scraping for {count} links...',
    'deep_progress': 'SCRAPING PROGRESS: {progress}% ({index}/{total}) - Current Question: {number}',
    'deep_success': 'Successfully scraped detailed content for {count} items.',
    'deep_fail_empty': 'Deep scraping finished, but no structured data was collected.',
    'no_links_found': 'No links were found during the initial scraping stage.',
    'prompt_url': '🌐 Enter the list URL (Press Enter to use test URL: {url}): ',
    'prompt_save_links': '💾 Save the link list to a file (links = [...])? (Y/n): ',
    'prompt_links_filename': '📄 Enter filename ({default}): ',
    'prompt_deep_scrape': '🧠 Do you want to perform deep scraping (Q/A/Options) on the {count} links found? (Y/n): ',
    'prompt_save_qa': '💾 Save structured Q/A data (JSON format) for {count} items? (Y/n): ',
    'prompt_qa_filename': '📄 Enter filename ({default}): ',
    'error_link_extract': 'Link Extraction Error: {error}',
    'error_deep_critical': 'Critical Deep Scraping Error: {error}',
    'error_scrape_fail': 'Failed to scrape link {index} ({number}): {error}...',
    'error_file_save': 'Error saving file: {error}',
    'error_critical': 'CRITICAL ERROR: {error}'
}

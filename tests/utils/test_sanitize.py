from src.utils.sanitize import strip_html, mask_email, mask_phone


class TestStripHtml:
    """Test reduction of submitted markup to plain text"""

    def test_plain_text_is_only_trimmed(self):
        assert strip_html("  Need a new roof  ") == "Need a new roof"

    def test_none_passes_through(self):
        assert strip_html(None) is None

    def test_tags_are_removed(self):
        assert strip_html("<p>Hello <b>there</b></p>") == "Hello there"

    def test_scripts_are_dropped_entirely(self):
        assert strip_html("Hi<script>alert('x')</script>") == "Hi"

    def test_line_breaks_are_kept(self):
        assert strip_html("Line one<br>Line two") == "Line one\nLine two"

    def test_entities_are_decoded(self):
        assert strip_html("Tom &amp; Jerry") == "Tom & Jerry"


class TestMasking:
    """Test masking of personal details for logs"""

    def test_mask_email(self):
        assert mask_email("someone@example.com") == "som***@***"
        assert mask_email(None) == "none"

    def test_mask_phone(self):
        assert mask_phone("555-0100") == "***-***-****"
        assert mask_phone("") == "none"

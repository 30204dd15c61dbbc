"""Tests for rule application and the classified property record."""

import dataclasses

import pytest

from agentfacts.classifier import AgentProperties, WorkingPatch, classify
from agentfacts.rules import DEFAULT_RULES, DeviceClass, Rule


class TestRulePrecedence:
    """Test first-match-wins, field by field."""

    def test_earlier_rule_wins_per_field(self):
        rules = [
            Rule("ipad", device_class="desktop", device_name="iPad"),
            Rule("mobile", device_class="mobile"),
        ]
        props = classify("Mozilla/5.0 (iPad; CPU OS 16_0) Mobile/15E148", rules)
        assert props.device_class == DeviceClass.DESKTOP
        assert props.device_name == "iPad"

    def test_reordering_changes_result(self):
        rules = [
            Rule("mobile", device_class="mobile"),
            Rule("ipad", device_class="desktop", device_name="iPad"),
        ]
        props = classify("Mozilla/5.0 (iPad; CPU OS 16_0) Mobile/15E148", rules)
        assert props.device_class == DeviceClass.MOBILE
        # The later rule still contributes fields the earlier one left unset
        assert props.device_name == "iPad"

    def test_order_not_match_length(self):
        rules = [
            Rule("fox", agent_name="Short"),
            Rule("firefox", agent_name="Long"),
        ]
        assert classify("Firefox/1.0", rules).agent_name == "Short"

    def test_non_matching_rules_ignored(self):
        rules = [
            Rule("opera", agent_name="Opera"),
            Rule("firefox", agent_name="Firefox"),
        ]
        assert classify("Firefox/1.0", rules).agent_name == "Firefox"

    def test_match_is_case_insensitive(self):
        rules = [Rule("firefox", agent_name="Firefox")]
        assert classify("FIREFOX/1.0", rules).agent_name == "Firefox"


class TestVersionFields:
    """Test how literal versions and marker keys combine."""

    def test_marker_key_resolves_version(self):
        rules = [Rule("firefox", agent_name="Firefox", agent_version_key="firefox/")]
        assert classify("Gecko Firefox/3.6.13", rules).agent_version == (3, 6, 13)

    def test_literal_beats_marker(self):
        rules = [
            Rule("trident/4.0", agent_version="8.0"),
            Rule("msie", agent_name="MSIE", agent_version_key="msie "),
        ]
        props = classify("Mozilla/4.0 (compatible; MSIE 7.0; Trident/4.0)", rules)
        assert props.agent_version == (8, 0, 0)

    def test_empty_literal_defers_to_marker(self):
        rules = [Rule("chrome", agent_version="", agent_version_key="chrome/")]
        assert classify("Chrome/120.0.6099.71", rules).agent_version == (120, 0, 6099)

    def test_empty_literal_blocks_later_literal(self):
        """An empty literal occupies the field, so a later literal is not used."""
        rules = [
            Rule("chromeframe", agent_version="", agent_version_key="chromeframe/"),
            Rule("trident/4.0", agent_version="8.0"),
        ]
        props = classify("MSIE 8.0; Trident/4.0; chromeframe/11.0.696.57)", rules)
        assert props.agent_version == (11, 0, 696)

    def test_missing_marker_gives_zero(self):
        rules = [Rule("mac", platform_name="Mac OS", platform_version_key="mac os x ")]
        props = classify("Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X)", rules)
        assert props.platform_name == "Mac OS"
        assert props.platform_version == (0, 0, 0)

    def test_literal_without_marker_is_normalized(self):
        rules = [Rule("safari/125", agent_version="1.2")]
        assert classify("Safari/125.8", rules).agent_version == (1, 2, 0)

    def test_platform_version_from_marker(self):
        rules = [Rule("nt ", platform_name="Windows", platform_version_key="nt ")]
        props = classify("Mozilla/4.0 (compatible; MSIE 8.0; Windows NT 6.1; Trident/4.0)", rules)
        assert props.platform_version == (6, 1, 0)


class TestDefaults:
    """Test default values when nothing matches."""

    def test_unmatched_gives_all_defaults(self):
        props = classify("curl/8.4.0", DEFAULT_RULES)
        assert props == AgentProperties(
            device_class=DeviceClass.DESKTOP,
            agent_name="Unknown",
            agent_version=(0, 0, 0),
            platform_name="Unknown",
            platform_version=(0, 0, 0),
            device_name="PC",
        )

    def test_empty_rule_table(self):
        assert classify("Mozilla/5.0 Firefox/120.0", []) == AgentProperties()

    def test_empty_and_none_identity(self):
        assert classify("", DEFAULT_RULES) == AgentProperties()
        assert classify(None, DEFAULT_RULES) == AgentProperties()

    def test_partial_match_fills_the_rest(self):
        props = classify("something windows", [Rule("windows", platform_name="Windows")])
        assert props.platform_name == "Windows"
        assert props.agent_name == "Unknown"
        assert props.device_name == "PC"


class TestClassifyIsPure:
    """Test idempotence and immutability."""

    def test_same_input_same_record(self):
        ua = "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:120.0) Gecko/20100101 Firefox/120.0"
        assert classify(ua, DEFAULT_RULES) == classify(ua, DEFAULT_RULES)

    def test_record_is_frozen(self):
        props = classify("Firefox/3.5", DEFAULT_RULES)
        with pytest.raises(dataclasses.FrozenInstanceError):
            props.agent_name = "Chrome"

    def test_rules_untouched(self):
        rules = [Rule("firefox", agent_name="Firefox", agent_version_key="firefox/")]
        before = list(rules)
        classify("Firefox/3.5", rules)
        assert rules == before


class TestWorkingPatch:
    """Test the per-field set-if-absent fold."""

    def test_absorb_keeps_existing(self):
        patch = WorkingPatch()
        patch.absorb(Rule("a", agent_name="First"))
        patch.absorb(Rule("b", agent_name="Second", device_name="Phone"))
        assert patch.agent_name == "First"
        assert patch.device_name == "Phone"

    def test_empty_string_counts_as_set(self):
        patch = WorkingPatch()
        patch.absorb(Rule("a", agent_version=""))
        patch.absorb(Rule("b", agent_version="8.0"))
        assert patch.agent_version == ""


class TestDescribe:
    """Test the diagnostic one-liner."""

    def test_default_record(self):
        assert AgentProperties().describe() == "Unknown 0.0.0 on Unknown 0.0.0 on a PC (desktop)"

    def test_an_before_i(self):
        props = AgentProperties(device_name="iPhone", device_class=DeviceClass.MOBILE)
        assert props.describe().endswith("on an iPhone (mobile)")

    def test_article_is_case_sensitive(self):
        props = AgentProperties(device_name="Intel box")
        assert props.describe().endswith("on a Intel box (desktop)")

    def test_full_line(self):
        props = AgentProperties(
            agent_name="Firefox",
            agent_version=(3, 5, 0),
            platform_name="Linux",
            platform_version=(2, 6, 32),
        )
        assert props.describe() == "Firefox 3.5.0 on Linux 2.6.32 on a PC (desktop)"

    def test_to_dict(self):
        props = AgentProperties(agent_name="Chrome", agent_version=(120, 0, 0))
        assert props.to_dict() == {
            "device_class": "desktop",
            "agent_name": "Chrome",
            "agent_version": "120.0.0",
            "platform_name": "Unknown",
            "platform_version": "0.0.0",
            "device_name": "PC",
        }

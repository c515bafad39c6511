"""Security gate tests."""

from unittest.mock import MagicMock

import pytest

from neo_storage.application.services.security_gate import SecurityGate
from neo_storage.config.settings import SecuritySettings
from neo_storage.core.exceptions import SecurityThreat
from neo_storage.core.value_objects.scan_result import ScanResult


def _scanner(name):
    scanner = MagicMock()
    scanner.name = name
    scanner.scan.return_value = ScanResult.ok(name)
    return scanner


class TestSecurityGate:
    
    @pytest.fixture
    def scanners(self):
        return {"image": _scanner("image"), "document": _scanner("document"), "generic": _scanner("generic")}
    
    def _gate(self, scanners, **settings):
        return SecurityGate(
            image_scanner=scanners["image"],
            document_scanner=scanners["document"],
            generic_scanner=scanners["generic"],
            settings=SecuritySettings(**settings),
        )
    
    @pytest.mark.parametrize("mime_type,expected", [
        ("image/png", "image"),
        ("image/svg+xml", "image"),
        ("application/pdf", "document"),
        ("text/plain", "document"),
        ("video/mp4", "generic"),
        ("application/zip", "generic"),
    ])
    def test_dispatch_by_family(self, scanners, mime_type, expected):
        gate = self._gate(scanners)
        
        gate.scan(b"content", "file", mime_type, enabled=True)
        
        assert scanners[expected].scan.call_count == 1
        assert sum(scanner.scan.call_count for scanner in scanners.values()) == 1
    
    def test_disabled_category_is_not_scanned(self, scanners):
        gate = self._gate(scanners, scan_images=False, scan_documents=False)
        
        assert gate.select_scanner("image/png") is None
        assert gate.select_scanner("application/pdf") is None
        assert gate.scan(b"<?php", "a.png", "image/png", enabled=True) is None
        assert gate.scan(b"<?php", "a.pdf", "application/pdf", enabled=True) is None
        assert all(scanner.scan.call_count == 0 for scanner in scanners.values())
    
    def test_disabled_category_leaves_others_scanned(self, scanners):
        gate = self._gate(scanners, scan_images=False)
        
        gate.scan(b"content", "a.pdf", "application/pdf", enabled=True)
        gate.scan(b"content", "a.zip", "application/zip", enabled=True)
        
        assert scanners["document"].scan.call_count == 1
        assert scanners["generic"].scan.call_count == 1
        assert scanners["image"].scan.call_count == 0
    
    def test_scan_disabled_is_noop(self, scanners):
        assert self._gate(scanners).scan(b"<?php", "a.php", "text/plain", enabled=False) is None
        assert all(scanner.scan.call_count == 0 for scanner in scanners.values())
    
    def test_threat_raises(self, scanners):
        scanners["generic"].scan.return_value = ScanResult.threat_found("generic", "Malicious content detected", "<\\?php")
        
        with pytest.raises(SecurityThreat) as exc_info:
            self._gate(scanners).scan(b"<?php", "evil.zip", "application/zip", enabled=True)
        
        assert exc_info.value.filename == "evil.zip"
        assert exc_info.value.scanner == "generic"
        assert exc_info.value.pattern == "<\\?php"
    
    def test_scanner_crash_fails_closed(self, scanners):
        scanners["image"].scan.side_effect = RuntimeError("decoder exploded")
        
        with pytest.raises(SecurityThreat) as exc_info:
            self._gate(scanners).scan(b"x", "a.png", "image/png", enabled=True)
        
        assert exc_info.value.threat == "scan_error"
        assert "Security scan failed for file: a.png" in exc_info.value.message

"""Tests for iOS file relevance heuristics."""

import pytest

from appstore_compliance.analysis.relevance import is_ios_relevant_file


class TestIsIosRelevantFile:
    @pytest.mark.parametrize(
        "path",
        [
            "App/ContentView.swift",
            "Legacy/Bridge.m",
            "Legacy/Bridge.h",
            "App/Info.plist",
            "App/Main.storyboard",
            "App/App.entitlements",
            "App.xcodeproj/project.pbxproj",
            "Podfile",
            "Package.swift",
            "Cartfile.resolved",
            "config/app.json",
            "package.json",
        ],
    )
    def test_relevant(self, path):
        assert is_ios_relevant_file(path)

    @pytest.mark.parametrize(
        "path",
        ["README.md", "src/index.ts", "assets/logo.png", "data/users.json"],
    )
    def test_not_relevant(self, path):
        assert not is_ios_relevant_file(path)

    def test_case_insensitive(self):
        assert is_ios_relevant_file("APP/VIEW.SWIFT")

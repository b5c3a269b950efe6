"""Canned form values, report and history shown in sample-data mode."""

from appstore_compliance.models import AnalysisResult, HistoryEntry

SAMPLE_CODE = (
    "import UIKit\n"
    "import CoreLocation\n"
    "\n"
    "class LocationManager: NSObject, CLLocationManagerDelegate {\n"
    "    let manager = CLLocationManager()\n"
    "    func startTracking() {\n"
    "        manager.requestWhenInUseAuthorization()\n"
    "        manager.startUpdatingLocation()\n"
    "    }\n"
    "}"
)
SAMPLE_DESCRIPTION = (
    "A photo synchronization app that backs up your photos to the cloud, "
    "with social sharing features and a premium subscription for unlimited storage."
)
SAMPLE_APP_NAME = "PhotoSync Pro"
SAMPLE_SUBTITLE = "Photo Backup & Sync - Cloud Storage Photo Manager"
SAMPLE_KEYWORDS = "photo, backup, sync, cloud, storage, gallery, share"
SAMPLE_AGE_RATING = "4+"

AGE_RATINGS = ("4+", "9+", "12+", "17+")

SAMPLE_RESULT = AnalysisResult.model_validate({
    "compliance_score": 72,
    "readiness_status": "needs_fixes",
    "risk_summary": {"high": 3, "medium": 5, "low": 2},
    "readiness_checklist": [
        {"item": "Privacy policy URL provided", "status": "pass",
         "details": "A privacy policy link is present in the app metadata."},
        {"item": "Privacy nutrition label matches data collection", "status": "fail",
         "details": "Location and contact info are collected but not declared."},
        {"item": "Purpose strings for protected resources", "status": "warning",
         "details": "NSLocationWhenInUseUsageDescription is generic."},
        {"item": "In-app account deletion", "status": "fail",
         "details": "No deletion flow found."},
        {"item": "Sign in with Apple offered alongside third-party login", "status": "not_applicable",
         "details": "The app has no third-party login."},
    ],
    "categories": [
        {
            "category_name": "Privacy & Data Collection",
            "category_summary": (
                "Several privacy-related issues found. The app collects user data "
                "without adequate disclosure in the privacy policy."
            ),
            "violations": [
                {
                    "title": "Missing Privacy Nutrition Label",
                    "severity": "high",
                    "guideline_reference": "Guideline 5.1.1",
                    "description": (
                        "App collects email and location data but does not declare these "
                        "data types in the App Privacy nutrition label on App Store Connect."
                    ),
                    "affected_code": "CLLocationManager.requestWhenInUseAuthorization()",
                    "suggested_fix": (
                        "Declare Location and Contact Info data collection in App Store Connect "
                        "and provide a clear NSLocationWhenInUseUsageDescription in Info.plist."
                    ),
                },
                {
                    "title": "Insufficient Data Deletion Mechanism",
                    "severity": "medium",
                    "guideline_reference": "Guideline 5.1.1(v)",
                    "description": "No account deletion or data erasure option found in the app.",
                    "affected_code": "N/A - Missing implementation",
                    "suggested_fix": (
                        "Implement an in-app account deletion flow that lets users request "
                        "full data erasure."
                    ),
                },
            ],
        },
        {
            "category_name": "UI/UX & Technical",
            "category_summary": "Minor technical issues that could trigger review rejection.",
            "violations": [
                {
                    "title": "Non-Standard Back Navigation",
                    "severity": "low",
                    "guideline_reference": "Guideline 4.0 - Design",
                    "description": "The swipe-to-go-back gesture is disabled on some screens.",
                    "affected_code": (
                        "navigationController?.interactivePopGestureRecognizer?.isEnabled = false"
                    ),
                    "suggested_fix": "Re-enable the interactive pop gesture recognizer.",
                },
                {
                    "title": "Missing iPad Layout Adaptation",
                    "severity": "medium",
                    "guideline_reference": "Guideline 2.4.1",
                    "description": "Content appears stretched on iPad displays.",
                    "affected_code": "UIDevice.current.userInterfaceIdiom check missing",
                    "suggested_fix": "Use Size Classes and Auto Layout for adaptive layouts.",
                },
            ],
        },
        {
            "category_name": "Content & Monetization",
            "category_summary": "One issue found with subscription terminology.",
            "violations": [
                {
                    "title": "Unclear Subscription Terms",
                    "severity": "high",
                    "guideline_reference": "Guideline 3.1.2(a)",
                    "description": (
                        "The purchase screen does not state the renewal period and "
                        "cancellation terms before the purchase button."
                    ),
                    "affected_code": "SubscriptionView.swift - purchaseButton action",
                    "suggested_fix": (
                        "Show price, renewal period and a link to subscription management "
                        "before the user taps Subscribe."
                    ),
                },
            ],
        },
        {
            "category_name": "Metadata & Marketing",
            "category_summary": "Keywords and screenshots need attention.",
            "violations": [
                {
                    "title": "Keyword Stuffing in Subtitle",
                    "severity": "medium",
                    "guideline_reference": "Guideline 2.3.7",
                    "description": "The subtitle repeats keywords that already appear in the app name.",
                    "affected_code": "N/A - App Store Connect metadata",
                    "suggested_fix": "Use unique, descriptive terms in the subtitle.",
                },
                {
                    "title": "Screenshots Show Non-iOS UI Elements",
                    "severity": "high",
                    "guideline_reference": "Guideline 2.3.1",
                    "description": "Screenshots include Android-style navigation bars.",
                    "affected_code": "N/A - Marketing assets",
                    "suggested_fix": "Replace all screenshots with captures from iOS devices.",
                },
            ],
        },
    ],
    "overall_assessment": (
        "## Compliance Overview\n\n"
        "The app has **several critical issues** that are likely to result in App Store "
        "rejection if not addressed before submission.\n\n"
        "### Key Concerns\n"
        "- **Privacy compliance** is the most urgent area\n"
        "- **Subscription transparency** needs immediate attention\n"
        "- **Marketing materials** contain elements that will trigger rejection\n\n"
        "### Recommendation\n"
        "Address the **3 high-severity issues** before submitting for review."
    ),
    "priority_fixes": [
        {"priority": 1, "title": "Add Privacy Nutrition Labels",
         "category": "Privacy & Data Collection",
         "action": "Declare all collected data types in App Store Connect and add purpose strings."},
        {"priority": 2, "title": "Fix Subscription Disclosure",
         "category": "Content & Monetization",
         "action": "Add pricing, renewal terms and cancellation instructions to the purchase screen."},
        {"priority": 3, "title": "Replace Marketing Screenshots",
         "category": "Metadata & Marketing",
         "action": "Capture new screenshots on iOS devices with native UI elements."},
        {"priority": 4, "title": "Implement Account Deletion",
         "category": "Privacy & Data Collection",
         "action": "Build an in-app account deletion flow."},
    ],
})


def _sample_entry(
    entry_id: str, date: str, name: str, score: int, high: int, medium: int, low: int
) -> HistoryEntry:
    result = SAMPLE_RESULT.model_copy(update={
        "compliance_score": score,
        "readiness_status": None,
        "risk_summary": SAMPLE_RESULT.risk_summary.model_copy(
            update={"high": high, "medium": medium, "low": low}
        ),
    })
    return HistoryEntry(
        id=entry_id,
        date=date,
        app_name=name,
        compliance_score=score,
        high_count=high,
        medium_count=medium,
        low_count=low,
        result=result,
    )


SAMPLE_HISTORY: tuple[HistoryEntry, ...] = (
    _sample_entry("hist-001", "2025-02-18T14:30:00Z", "PhotoSync Pro", 72, 3, 5, 2),
    _sample_entry("hist-002", "2025-02-15T09:15:00Z", "FitTrack Daily", 89, 1, 2, 3),
    _sample_entry("hist-003", "2025-02-10T16:45:00Z", "BudgetWise", 45, 6, 4, 1),
)

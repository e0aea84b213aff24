from __future__ import annotations

from typing import Any, Dict, List

# Built-in provider catalog, validated into `Provider` models by `ProviderRegistry.default()`.
BUILTIN_PROVIDERS: List[Dict[str, Any]] = [
    # CRM
    {
        "id": "salesforce",
        "name": "Salesforce",
        "description": "Sync leads, contacts, accounts and opportunities.",
        "category": "CRM",
        "capabilities": ["read", "write"],
        "settings_kind": "crm",
        "website": "https://www.salesforce.com",
        "scopes": ["api", "refresh_token"],
    },
    {
        "id": "hubspot",
        "name": "HubSpot",
        "description": "Sync contacts, companies and deals.",
        "category": "CRM",
        "capabilities": ["read", "write"],
        "settings_kind": "crm",
        "website": "https://www.hubspot.com",
        "scopes": ["crm.objects.contacts.read", "crm.objects.deals.read"],
    },
    {
        "id": "salesloft",
        "name": "Salesloft",
        "description": "Import cadences, calls and conversation recordings.",
        "category": "CRM",
        "capabilities": ["read"],
        "settings_kind": "call_intelligence",
        "record_type_label": "Call Type",
        "website": "https://salesloft.com",
    },
    # Communication
    {
        "id": "slack",
        "name": "Slack",
        "description": "Answer questions in channels and direct messages.",
        "category": "Communication",
        "capabilities": ["read", "write"],
        "settings_kind": "communication",
        "website": "https://slack.com",
        "scopes": ["app_mentions:read", "channels:history", "chat:write"],
    },
    {
        "id": "msteams",
        "name": "Microsoft Teams",
        "description": "Answer questions in Teams channels and chats.",
        "category": "Communication",
        "capabilities": ["read", "write"],
        "settings_kind": "communication",
        "website": "https://www.microsoft.com/microsoft-teams",
    },
    {
        "id": "gong",
        "name": "Gong",
        "description": "Learn from recorded sales calls and transcripts.",
        "category": "Communication",
        "settings_kind": "call_intelligence",
        "record_type_label": "Call Type",
        "website": "https://www.gong.io",
    },
    {
        "id": "avoma",
        "name": "Avoma",
        "description": "Learn from meeting recordings, notes and transcripts.",
        "category": "Communication",
        "settings_kind": "call_intelligence",
        "record_type_label": "Meeting Type",
        "website": "https://www.avoma.com",
    },
    {
        "id": "chorus",
        "name": "Chorus",
        "description": "Import conversation intelligence from Chorus by ZoomInfo.",
        "category": "Communication",
        "settings_kind": "call_intelligence",
        "record_type_label": "Call Type",
        "website": "https://www.chorus.ai",
    },
    {
        "id": "clari",
        "name": "Clari",
        "description": "Import call recordings and deal context from Clari Copilot.",
        "category": "Communication",
        "settings_kind": "call_intelligence",
        "record_type_label": "Call Type",
        "website": "https://www.clari.com",
    },
    {
        "id": "google-calendar",
        "name": "Google Calendar",
        "description": "Select which meetings are eligible for learning.",
        "category": "Communication",
        "settings_kind": "call_intelligence",
        "record_type_label": "Meeting Type",
        "website": "https://calendar.google.com",
        "scopes": ["https://www.googleapis.com/auth/calendar.readonly"],
    },
    {
        "id": "zendesk",
        "name": "Zendesk",
        "description": "Import help center articles and resolved tickets.",
        "category": "Communication",
        "settings_kind": "document",
        "website": "https://www.zendesk.com",
    },
    {
        "id": "intercom",
        "name": "Intercom",
        "description": "Import help articles and conversation history.",
        "category": "Communication",
        "settings_kind": "document",
        "website": "https://www.intercom.com",
    },
    # Storage & Wiki
    {
        "id": "google-drive",
        "name": "Google Drive",
        "description": "Import documents, spreadsheets and presentations.",
        "category": "Storage & Wiki",
        "settings_kind": "document",
        "website": "https://drive.google.com",
        "scopes": ["https://www.googleapis.com/auth/drive.readonly"],
    },
    {
        "id": "sharepoint",
        "name": "SharePoint",
        "description": "Import document libraries, lists and pages.",
        "category": "Storage & Wiki",
        "settings_kind": "document",
        "website": "https://www.microsoft.com/microsoft-365/sharepoint",
    },
    {
        "id": "notion",
        "name": "Notion",
        "description": "Import pages and databases from your workspace.",
        "category": "Storage & Wiki",
        "settings_kind": "document",
        "website": "https://www.notion.so",
    },
    {
        "id": "confluence",
        "name": "Confluence",
        "description": "Import spaces and pages from Confluence.",
        "category": "Storage & Wiki",
        "settings_kind": "document",
        "website": "https://www.atlassian.com/software/confluence",
    },
    {
        "id": "google-sheets",
        "name": "Google Sheets",
        "description": "Import rows from selected spreadsheets.",
        "category": "Storage & Wiki",
        "settings_kind": "document",
        "website": "https://sheets.google.com",
    },
    {
        "id": "document360",
        "name": "Document360",
        "description": "Import knowledge base categories and articles.",
        "category": "Storage & Wiki",
        "settings_kind": "document",
        "oauth": False,
        "website": "https://document360.com",
    },
    {
        "id": "jira",
        "name": "Jira",
        "description": "Import projects and issues for product context.",
        "category": "Storage & Wiki",
        "settings_kind": "document",
        "website": "https://www.atlassian.com/software/jira",
    },
    {
        "id": "salesforce-knowledge",
        "name": "Salesforce Knowledge",
        "description": "Import knowledge articles from Salesforce.",
        "category": "Storage & Wiki",
        "settings_kind": "document",
        "website": "https://www.salesforce.com",
    },
    # Enablement
    {
        "id": "highspot",
        "name": "Highspot",
        "description": "Import spots, pitches and sales content.",
        "category": "Enablement",
        "settings_kind": "document",
        "website": "https://www.highspot.com",
    },
    {
        "id": "seismic",
        "name": "Seismic",
        "description": "Import sales enablement content libraries.",
        "category": "Enablement",
        "settings_kind": "document",
        "website": "https://seismic.com",
    },
    {
        "id": "mindtickle",
        "name": "Mindtickle",
        "description": "Import training modules and readiness content.",
        "category": "Enablement",
        "settings_kind": "document",
        "oauth": False,
        "website": "https://www.mindtickle.com",
    },
    {
        "id": "mindtickle-call-ai",
        "name": "Mindtickle Call AI",
        "description": "Learn from call recordings analyzed by Mindtickle.",
        "category": "Enablement",
        "settings_kind": "call_intelligence",
        "record_type_label": "Call Type",
        "oauth": False,
        "website": "https://www.mindtickle.com",
    },
    {
        "id": "crayon",
        "name": "Crayon",
        "description": "Import competitive battlecards and intel.",
        "category": "Enablement",
        "settings_kind": "document",
        "oauth": False,
        "website": "https://www.crayon.co",
    },
    {
        "id": "zapier",
        "name": "Zapier",
        "description": "Trigger workflows from conversation events.",
        "category": "Enablement",
        "capabilities": ["write"],
        "settings_kind": "generic",
        "website": "https://zapier.com",
    },
]

"""
Built-in specs for ALL layout block kinds.
Spec shape per type_id:
{
  "label": "Logo",
  "description": "...",
  "icon": "Image",
  "default_section": "header",
  "position": {"x":0, "y":0, "width":25, "height":"auto"},
  "style": {...},
  "config": {"<key>": <default>, ...},
  "fields": {
     "<key>": {"type":"bool|int|number|enum|multi|text", "choices":[...], "min":..., "max":...}
  },
  "aliases": ["token1","token2",...]
}
"""

LINE_COLUMNS = [
    "reference", "description", "quantity", "unit",
    "price", "discount", "tax", "subtotal",
]

BUILTIN_SPECS = {
    # ---------- Header ----------
    "logo": {
        "label": "Logo",
        "description": "Company logo",
        "icon": "Image",
        "default_section": "header",
        "position": {"x": 0, "y": 0, "width": 25, "height": "auto"},
        "style": {},
        "config": {"show_logo": True, "max_width": 150},
        "fields": {
            "show_logo": {"type": "bool"},
            "max_width": {"type": "int", "min": 50, "max": 300},
        },
        "aliases": ["brand"],
    },
    "company-info": {
        "label": "Company details",
        "description": "Name, tax id, address and contact of the issuer",
        "icon": "Building2",
        "default_section": "header",
        "position": {"x": 0, "y": 0, "width": 40, "height": "auto"},
        "style": {},
        "config": {"show_tax_id": True, "show_address": True, "show_contact": True, "show_web": False},
        "fields": {
            "show_tax_id": {"type": "bool"},
            "show_address": {"type": "bool"},
            "show_contact": {"type": "bool"},
            "show_web": {"type": "bool"},
        },
        "aliases": ["company", "issuer"],
    },
    "document-title": {
        "label": "Document title",
        "description": "Document heading (INVOICE, QUOTE, ...)",
        "icon": "Type",
        "default_section": "header",
        "position": {"x": 60, "y": 0, "width": 40, "height": "auto"},
        "style": {"text_align": "right"},
        "config": {"title": "INVOICE"},
        "fields": {
            "title": {"type": "text", "max_length": 80},
        },
        "aliases": ["title"],
    },
    "document-info": {
        "label": "Document details",
        "description": "Number, date and due date",
        "icon": "FileText",
        "default_section": "header",
        "position": {"x": 60, "y": 0, "width": 40, "height": "auto"},
        "style": {"text_align": "right"},
        "config": {"show_number": True, "show_date": True, "show_due_date": True},
        "fields": {
            "show_number": {"type": "bool"},
            "show_date": {"type": "bool"},
            "show_due_date": {"type": "bool"},
        },
        "aliases": ["doc-info", "info"],
    },
    "client-info": {
        "label": "Client details",
        "description": "Recipient name, tax id, address and contact",
        "icon": "User",
        "default_section": "header",
        "position": {"x": 0, "y": 0, "width": 45, "height": "auto"},
        "style": {},
        "config": {
            "show_heading": True, "show_code": False, "show_tax_id": True,
            "show_address": True, "show_contact": True,
        },
        "fields": {
            "show_heading": {"type": "bool"},
            "show_code": {"type": "bool"},
            "show_tax_id": {"type": "bool"},
            "show_address": {"type": "bool"},
            "show_contact": {"type": "bool"},
        },
        "aliases": ["client", "customer"],
    },

    # ---------- Body ----------
    "line-items-table": {
        "label": "Line items",
        "description": "Table of products and services",
        "icon": "Table",
        "default_section": "body",
        "position": {"x": 0, "y": 0, "width": 100, "height": "auto"},
        "style": {},
        "config": {"columns": list(LINE_COLUMNS), "zebra_rows": True},
        "fields": {
            "columns": {"type": "multi", "choices": LINE_COLUMNS},
            "zebra_rows": {"type": "bool"},
        },
        "aliases": ["table", "lines", "items"],
    },
    "totals": {
        "label": "Totals",
        "description": "Subtotal, discounts, taxes and total",
        "icon": "Calculator",
        "default_section": "body",
        "position": {"x": 60, "y": 0, "width": 40, "height": "auto"},
        "style": {"text_align": "right"},
        "config": {
            "show_subtotal": True, "show_discount": True, "show_tax_base": True,
            "show_tax": True, "show_total": True, "highlight_total": True,
        },
        "fields": {
            "show_subtotal": {"type": "bool"},
            "show_discount": {"type": "bool"},
            "show_tax_base": {"type": "bool"},
            "show_tax": {"type": "bool"},
            "show_total": {"type": "bool"},
            "highlight_total": {"type": "bool"},
        },
        "aliases": ["total", "summary"],
    },

    # ---------- Footer ----------
    "payment-method": {
        "label": "Payment method",
        "description": "Payment method and due dates",
        "icon": "CreditCard",
        "default_section": "footer",
        "position": {"x": 0, "y": 0, "width": 50, "height": "auto"},
        "style": {},
        "config": {"show_payment_method": True, "show_due_dates": True},
        "fields": {
            "show_payment_method": {"type": "bool"},
            "show_due_dates": {"type": "bool"},
        },
        "aliases": ["payment"],
    },
    "bank-details": {
        "label": "Bank details",
        "description": "Bank account and IBAN",
        "icon": "Landmark",
        "default_section": "footer",
        "position": {"x": 50, "y": 0, "width": 50, "height": "auto"},
        "style": {},
        "config": {"show_bank_account": True, "show_iban": True},
        "fields": {
            "show_bank_account": {"type": "bool"},
            "show_iban": {"type": "bool"},
        },
        "aliases": ["bank", "iban"],
    },
    "terms": {
        "label": "Terms",
        "description": "Payment terms and conditions",
        "icon": "ScrollText",
        "default_section": "footer",
        "position": {"x": 0, "y": 0, "width": 100, "height": "auto"},
        "style": {},
        "config": {"text": ""},
        "fields": {
            "text": {"type": "text", "max_length": 4000},
        },
        "aliases": ["conditions"],
    },
    "signature": {
        "label": "Signature",
        "description": "Signature and stamp area",
        "icon": "PenTool",
        "default_section": "footer",
        "position": {"x": 70, "y": 0, "width": 30, "height": 40},
        "style": {},
        "config": {"show_line": True, "caption": "Signature and stamp"},
        "fields": {
            "show_line": {"type": "bool"},
            "caption": {"type": "text", "max_length": 120},
        },
        "aliases": ["sign"],
    },

    # ---------- Free elements ----------
    "free-text": {
        "label": "Free text",
        "description": "Custom text",
        "icon": "AlignLeft",
        "default_section": "body",
        "position": {"x": 0, "y": 0, "width": 100, "height": "auto"},
        "style": {},
        "config": {"text": "", "html": False},
        "fields": {
            "text": {"type": "text", "max_length": 4000},
            "html": {"type": "bool"},
        },
        "aliases": ["text", "note"],
    },
    "separator": {
        "label": "Separator",
        "description": "Horizontal rule",
        "icon": "Minus",
        "default_section": "body",
        "position": {"x": 0, "y": 0, "width": 100, "height": "auto"},
        "style": {"border_width": 1},
        "config": {},
        "fields": {},
        "aliases": ["rule", "hr"],
    },
    "spacer": {
        "label": "Spacer",
        "description": "Vertical blank space",
        "icon": "Square",
        "default_section": "body",
        "position": {"x": 0, "y": 0, "width": 100, "height": 20},
        "style": {},
        "config": {},
        "fields": {},
        "aliases": ["space", "gap"],
    },
    "image": {
        "label": "Image",
        "description": "Additional image",
        "icon": "ImagePlus",
        "default_section": "body",
        "position": {"x": 0, "y": 0, "width": 30, "height": "auto"},
        "style": {},
        "config": {"url": "", "alt": ""},
        "fields": {
            "url": {"type": "text", "max_length": 2048},
            "alt": {"type": "text", "max_length": 200},
        },
        "aliases": ["picture"],
    },
    "qr-code": {
        "label": "QR code",
        "description": "QR code with a link or payment data",
        "icon": "QrCode",
        "default_section": "footer",
        "position": {"x": 0, "y": 0, "width": 25, "height": "auto"},
        "style": {},
        "config": {"content": "url", "size": 60},
        "fields": {
            "content": {"type": "enum", "choices": ["url", "payment", "verification"]},
            "size": {"type": "int", "min": 40, "max": 120},
        },
        "aliases": ["qr"],
    },
}

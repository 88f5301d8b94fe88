# Per-locale notification templates as module-level constants.
# Placeholders in braces ({time}, {name}, {rating}, {comment}) are filled in
# by notifications.content. City and country names are data and are never
# translated.

SUPPORTED_LOCALES = ("en", "fr")
FALLBACK_LOCALE = "en"

NOTIFICATION_TEMPLATES = {
    "en": {
        "alert_match": {
            "request_title": "New delivery request matching your alert",
            "offer_title": "New offer of space matching your alert",
        },
        "rating_reminder": {
            "title": "Rate your delivery partner",
            "message": "Your delivery was completed {time} ago. Take a moment to rate {name}.",
            "default_partner_name": "your delivery partner",
        },
        "review": {
            "title": "New review received",
            "with_comment": '{name} rated you {rating}/5: "{comment}"',
            "without_comment": "{name} rated you {rating}/5",
            "default_reviewer_name": "Someone",
        },
    },
    "fr": {
        "alert_match": {
            "request_title": "Nouvelle demande de livraison correspondant à votre alerte",
            "offer_title": "Nouvelle offre d'espace correspondant à votre alerte",
        },
        "rating_reminder": {
            "title": "Évaluez votre partenaire de livraison",
            "message": "Votre livraison a été effectuée il y a {time}. Prenez un moment pour évaluer {name}.",
            "default_partner_name": "votre partenaire de livraison",
        },
        "review": {
            "title": "Nouvel avis reçu",
            "with_comment": '{name} vous a attribué {rating}/5 : "{comment}"',
            "without_comment": "{name} vous a attribué {rating}/5",
            "default_reviewer_name": "Quelqu'un",
        },
    },
}

# Human-readable elapsed time for each reminder step.
ELAPSED_TIME_LABELS = {
    "en": {3: "3 hours", 24: "24 hours", 48: "2 days", 96: "4 days", 168: "7 days"},
    "fr": {3: "3 heures", 24: "24 heures", 48: "2 jours", 96: "4 jours", 168: "7 jours"},
}

ELAPSED_HOURS_FALLBACK = {
    "en": "{hours} hours",
    "fr": "{hours} heures",
}

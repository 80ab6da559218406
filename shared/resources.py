"""
Plugin locale resources (English defaults).

Registered with the host resource table on install and removed on uninstall.
Keys keep the host's dotted naming so existing translations still resolve.
"""

RESOURCE_PREFIX = "Plugins.Payments.PayPoint."

DEFAULT_RESOURCES: dict[str, str] = {
    "Plugins.Payments.PayPoint.Fields.AdditionalFee": "Additional fee",
    "Plugins.Payments.PayPoint.Fields.AdditionalFee.Hint": "Enter additional fee to charge your customers.",
    "Plugins.Payments.PayPoint.Fields.AdditionalFeePercentage": "Additional fee. Use percentage",
    "Plugins.Payments.PayPoint.Fields.AdditionalFeePercentage.Hint": (
        "Determines whether to apply a percentage additional fee to the order total. "
        "If not enabled, a fixed value is used."
    ),
    "Plugins.Payments.PayPoint.Fields.ApiPassword": "API password",
    "Plugins.Payments.PayPoint.Fields.ApiPassword.Hint": "Specify API password.",
    "Plugins.Payments.PayPoint.Fields.ApiUsername": "API username",
    "Plugins.Payments.PayPoint.Fields.ApiUsername.Hint": "Specify API username.",
    "Plugins.Payments.PayPoint.Fields.InstallationId": "Installation ID",
    "Plugins.Payments.PayPoint.Fields.InstallationId.Hint": "Specify installation ID.",
    "Plugins.Payments.PayPoint.Fields.UseSandbox": "Use Sandbox",
    "Plugins.Payments.PayPoint.Fields.UseSandbox.Hint": "Check to enable Sandbox (testing environment).",
    "Plugins.Payments.PayPoint.RedirectionTip": "You will be redirected to PayPoint site to complete the order.",
    "Plugins.Payments.PayPoint.PaymentMethodDescription": "You will be redirected to PayPoint site to complete the order.",
    # API response messages (not registered with the host)
    "Admin.Plugins.Saved": "The plugin settings have been saved.",
    "Admin.Plugins.Installed": "The plugin has been installed.",
    "Admin.Plugins.Uninstalled": "The plugin has been uninstalled.",
    "payments.paypoint.redirect.skipped": "Payment session was not created; the order remains pending.",
    "payments.paypoint.payment_info": "Payment method info",
    "payments.provider_error": "Payment provider error",
    "order.not_found": "Order not found",
    "auth.unauthorized": "Unauthorized",
    "auth.forbidden": "Admin token required",
    "health.ok": "OK",
    "validation.domain": "{reason}",
    "error.internal": "Internal server error",
    "validation.failed": "Validation failed: {reason}",
}

# Resources persisted by the installer (API messages stay local)
PLUGIN_RESOURCE_NAMES = tuple(k for k in DEFAULT_RESOURCES if k.startswith(RESOURCE_PREFIX))

"""Goldpoints admin."""

from django.contrib import admin
from django.utils.html import format_html

from goldpoints.models import PointsAccount, SalesRecord
from goldpoints.services import ledger, points
from goldpoints.utils import normalize_date


# ===========================================
# Inline Classes
# ===========================================


class PointsAccountInline(admin.StackedInline):
    model = PointsAccount
    extra = 0
    fields = ["total_points", "claimed_points", "unclaimed_points", "updated_at"]
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False

    def unclaimed_points(self, obj):
        return obj.unclaimed_points

    unclaimed_points.short_description = "Unclaimed"


# ===========================================
# SalesRecord Admin
# ===========================================


@admin.register(SalesRecord)
class SalesRecordAdmin(admin.ModelAdmin):
    list_display = [
        "customer_code",
        "name",
        "place",
        "mobile",
        "net_weight",
        "last_purchase_date",
    ]
    list_filter = ["place"]
    search_fields = ["customer_code", "name", "mobile", "postal_code"]
    readonly_fields = ["last_purchase_date", "created_at", "updated_at"]
    inlines = [PointsAccountInline]
    actions = ["recompute_selected", "normalize_all_dates"]

    fieldsets = [
        ("Identification", {"fields": ["customer_code", "name"]}),
        ("Address", {"fields": ["house", "street", "place", "postal_code"]}),
        ("Contact", {"fields": ["mobile"]}),
        (
            "Sales",
            {"fields": ["net_weight", "last_purchase_raw", "last_purchase_date"]},
        ),
        ("Timestamps", {"fields": ["created_at", "updated_at"], "classes": ["collapse"]}),
    ]

    def save_model(self, request, obj, form, change):
        obj.last_purchase_date = normalize_date(obj.last_purchase_raw)
        super().save_model(request, obj, form, change)

    @admin.action(description="Recompute points for selected customers")
    def recompute_selected(self, request, queryset):
        count = 0
        for code in queryset.values_list("customer_code", flat=True):
            points.recompute_customer(code)
            count += 1
        self.message_user(request, f"Recomputed points for {count} customers.")

    @admin.action(description="Normalize all purchase dates")
    def normalize_all_dates(self, request, queryset):
        changed = ledger.normalize_dates()
        self.message_user(request, f"Normalized {changed} purchase dates.")


# ===========================================
# PointsAccount Admin
# ===========================================


@admin.register(PointsAccount)
class PointsAccountAdmin(admin.ModelAdmin):
    list_display = [
        "customer_link",
        "total_points",
        "claimed_points",
        "unclaimed_badge",
        "updated_at",
    ]
    search_fields = ["customer__customer_code", "customer__name"]
    raw_id_fields = ["customer"]
    readonly_fields = ["total_points", "claimed_points", "updated_at"]

    def has_add_permission(self, request):
        return False

    def unclaimed_badge(self, obj):
        color = "green" if obj.unclaimed_points > 0 else "gray"
        return format_html('<span style="color: {};">{}</span>', color, obj.unclaimed_points)

    unclaimed_badge.short_description = "Unclaimed"

    def customer_link(self, obj):
        from django.urls import reverse

        url = reverse("admin:goldpoints_salesrecord_change", args=[obj.customer_id])
        return format_html('<a href="{}">{}</a>', url, obj.customer_id)

    customer_link.short_description = "Customer"

from django.contrib import admin
from django.utils import timezone

from .models import Account, OneTimeCode, BusinessProfile, Document, UserSettings
from .utils.constants import VerificationStatus

# Customize admin site
admin.site.site_header = "Kanisa Administration"
admin.site.site_title = "Kanisa Admin"
admin.site.index_title = "Welcome to Kanisa Admin Panel"


class BusinessProfileInline(admin.StackedInline):
    model = BusinessProfile
    extra = 0


class UserSettingsInline(admin.StackedInline):
    model = UserSettings
    extra = 0
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ['email', 'phone', 'first_name', 'last_name', 'role', 'status', 'registration_step', 'registration_completed', 'created_at']
    list_filter = ['role', 'status', 'registration_completed', 'is_active', 'is_staff']
    search_fields = ['email', 'phone', 'first_name', 'last_name', 'tax_id', 'national_id']
    ordering = ['-created_at']
    readonly_fields = ['password', 'created_at', 'updated_at', 'last_login']
    list_per_page = 50
    inlines = [BusinessProfileInline, UserSettingsInline]

    fieldsets = (
        (None, {'fields': ('email', 'phone', 'password')}),
        ('Personal info', {'fields': ('first_name', 'last_name', 'date_of_birth', 'tax_id', 'national_id', 'preferred_language')}),
        ('Registration', {'fields': ('role', 'status', 'registration_step', 'registration_completed', 'is_verified')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Dates', {'fields': ('last_login', 'created_at', 'updated_at')}),
    )


@admin.register(OneTimeCode)
class OneTimeCodeAdmin(admin.ModelAdmin):
    list_display = ['account', 'purpose', 'is_used', 'expires_at', 'created_at']
    list_filter = ['purpose', 'is_used']
    search_fields = ['account__email', 'account__phone']
    ordering = ['-created_at']
    readonly_fields = ['account', 'code', 'purpose', 'expires_at', 'created_at']


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = ['file_name', 'account', 'document_type', 'verification_status', 'file_size', 'created_at']
    list_filter = ['document_type', 'verification_status']
    search_fields = ['file_name', 'account__email', 'account__phone']
    ordering = ['-created_at']
    readonly_fields = ['file_url', 'file_name', 'file_size', 'mime_type', 'created_at', 'updated_at']
    actions = ['approve_documents', 'reject_documents']

    def approve_documents(self, request, queryset):
        updated = queryset.update(
            verification_status=VerificationStatus.APPROVED, verified_by=request.user, verified_at=timezone.now()
        )
        self.message_user(request, f'{updated} document(s) approved')
    approve_documents.short_description = 'Approve selected documents'

    def reject_documents(self, request, queryset):
        updated = queryset.update(
            verification_status=VerificationStatus.REJECTED, verified_by=request.user, verified_at=timezone.now()
        )
        self.message_user(request, f'{updated} document(s) rejected')
    reject_documents.short_description = 'Reject selected documents'

from django.contrib import admin
from django_summernote.admin import SummernoteModelAdmin

from board.models import Board, Column

# Register your models here.

class ColumnInline(admin.TabularInline):
    model = Column
    extra = 0

@admin.register(Board)
class BoardAdmin(SummernoteModelAdmin):
    list_display = ('name', 'owner', 'created_at', 'updated_at')
    search_fields = ('name', 'description', 'owner__email')
    filter_horizontal = ('members',)
    inlines = [ColumnInline]
    summernote_fields = ('description',)

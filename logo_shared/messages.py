"""
User-facing response messages in every supported locale.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from logo_shared.types import DEFAULT_LOCALE, Locale

MESSAGES: Mapping[Locale, Mapping[str, str]] = MappingProxyType(
    {
        Locale.EN: MappingProxyType(
            {
                "requestOk": "Request completed successfully",
                "logoCreated": "Logo created successfully",
                "logoUpdated": "Logo updated successfully",
                "logoDeleted": "Logo deleted successfully",
                "logoFetched": "Logo fetched successfully",
                "logoFetchedLegacy": "Logo fetched in legacy format successfully",
                "logosFetched": "Logos fetched successfully",
                "logosFetchedLegacy": "Logos fetched in legacy format successfully",
                "noLogos": "No logos available",
                "logoNotFound": "Logo not found",
                "legacyNotSupported": "This logo does not support legacy format",
                "layerCreated": "Layer created successfully",
                "layerUpdated": "Layer updated successfully",
                "layerDeleted": "Layer deleted successfully",
                "layersFetched": "Layers fetched successfully",
                "layerNotFound": "Layer not found",
                "categoryCreated": "Category created successfully",
                "categoryUpdated": "Category updated successfully",
                "categoryDeleted": "Category deleted successfully",
                "categoryFetched": "Category fetched successfully",
                "categoriesFetched": "Categories fetched successfully",
                "categoryNotFound": "Category not found",
                "assetCreated": "Asset created successfully",
                "assetUpdated": "Asset updated successfully",
                "assetDeleted": "Asset deleted successfully",
                "assetFetched": "Asset fetched successfully",
                "assetsFetched": "Assets fetched successfully",
                "assetNotFound": "Asset not found",
                "userCreated": "User created successfully",
                "userUpdated": "User updated successfully",
                "userDeleted": "User deleted successfully",
                "userFetched": "User fetched successfully",
                "usersFetched": "Users fetched successfully",
                "userNotFound": "User not found",
                "duplicateRecord": "Record already exists: {field}",
                "invalidData": "Invalid data provided",
                "thumbnailsFetched": "Logo thumbnails fetched successfully",
                "uncategorized": "Uncategorized",
                "versionCreated": "Logo version saved successfully",
                "versionsFetched": "Logo versions fetched successfully",
                "iconsFetched": "Category icons fetched successfully",
                "iconsAssigned": "Icons assigned to category successfully",
                "iconRemoved": "Icon removed from category successfully",
                "assignmentNotFound": "Icon is not assigned to this category",
                "notFound": "Resource not found",
                "serverError": "Internal server error",
            }
        ),
        Locale.AR: MappingProxyType(
            {
                "requestOk": "تم تنفيذ الطلب بنجاح",
                "logoCreated": "تم إنشاء الشعار بنجاح",
                "logoUpdated": "تم تحديث الشعار بنجاح",
                "logoDeleted": "تم حذف الشعار بنجاح",
                "logoFetched": "تم جلب الشعار بنجاح",
                "logoFetchedLegacy": "تم جلب الشعار بالتنسيق القديم بنجاح",
                "logosFetched": "تم جلب الشعارات بنجاح",
                "logosFetchedLegacy": "تم جلب الشعارات بالتنسيق القديم بنجاح",
                "noLogos": "لا توجد شعارات متاحة",
                "logoNotFound": "الشعار غير موجود",
                "legacyNotSupported": "هذا الشعار لا يدعم التنسيق القديم",
                "layerCreated": "تم إنشاء الطبقة بنجاح",
                "layerUpdated": "تم تحديث الطبقة بنجاح",
                "layerDeleted": "تم حذف الطبقة بنجاح",
                "layersFetched": "تم جلب الطبقات بنجاح",
                "layerNotFound": "الطبقة غير موجودة",
                "categoryCreated": "تم إنشاء الفئة بنجاح",
                "categoryUpdated": "تم تحديث الفئة بنجاح",
                "categoryDeleted": "تم حذف الفئة بنجاح",
                "categoryFetched": "تم جلب الفئة بنجاح",
                "categoriesFetched": "تم جلب الفئات بنجاح",
                "categoryNotFound": "الفئة غير موجودة",
                "assetCreated": "تم إنشاء الأصل بنجاح",
                "assetUpdated": "تم تحديث الأصل بنجاح",
                "assetDeleted": "تم حذف الأصل بنجاح",
                "assetFetched": "تم جلب الأصل بنجاح",
                "assetsFetched": "تم جلب الأصول بنجاح",
                "assetNotFound": "الأصل غير موجود",
                "userCreated": "تم إنشاء المستخدم بنجاح",
                "userUpdated": "تم تحديث المستخدم بنجاح",
                "userDeleted": "تم حذف المستخدم بنجاح",
                "userFetched": "تم جلب المستخدم بنجاح",
                "usersFetched": "تم جلب المستخدمين بنجاح",
                "userNotFound": "المستخدم غير موجود",
                "duplicateRecord": "السجل موجود بالفعل: {field}",
                "invalidData": "البيانات غير صحيحة",
                "thumbnailsFetched": "تم جلب الصور المصغرة للشعارات بنجاح",
                "uncategorized": "غير مصنف",
                "versionCreated": "تم حفظ نسخة الشعار بنجاح",
                "versionsFetched": "تم جلب نسخ الشعار بنجاح",
                "iconsFetched": "تم جلب أيقونات الفئة بنجاح",
                "iconsAssigned": "تم تعيين الأيقونات للفئة بنجاح",
                "iconRemoved": "تمت إزالة الأيقونة من الفئة بنجاح",
                "assignmentNotFound": "الأيقونة غير معينة لهذه الفئة",
                "notFound": "المورد غير موجود",
                "serverError": "خطأ في الخادم",
            }
        ),
    }
)


def get_message(locale: Locale | str, key: str, **params: object) -> str:
    """
    Look up `key` for `locale` and fill `{name}` placeholders from `params`.

    Unknown locales read the English table; unknown keys come back unchanged.
    """
    messages = MESSAGES.get(locale) or MESSAGES[DEFAULT_LOCALE]
    message = messages.get(key, key)
    for name, value in params.items():
        message = message.replace(f"{{{name}}}", str(value))
    return message

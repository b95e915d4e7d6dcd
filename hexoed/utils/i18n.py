from __future__ import annotations

DEFAULT_LANGUAGE = "zh"

TRANSLATIONS: dict[str, dict[str, str]] = {
    "zh": {
        "posts": "文章",
        "assets": "素材",
        "search": "搜索文章…",
        "newPost": "新建文章",
        "save": "保存",
        "delete": "删除",
        "refresh": "刷新",
        "settings": "设置",
        "toggleTheme": "切换主题",
        "editMode": "编辑",
        "previewMode": "预览",
        "splitMode": "分屏",
        "upload": "上传图片",
        "copyPath": "复制引用",
        "rename": "重命名",
        "renamePrompt": "新文件名：",
        "uploadFolder": "目标文件夹（留空为根目录）：",
        "fileExist": "文件已存在",
        "deleteConfirm": "确定要将此文件移到回收站吗？",
        "unsaved": "有未保存的修改，确定切换",
        "saved": "已保存",
        "saveFailed": "保存失败",
        "renameFailed": "重命名失败",
        "deleteFailed": "删除失败",
        "uploadFailed": "上传失败",
        "copied": "已复制到剪贴板",
        "configureFirst": "请先在设置中配置文章和图片目录",
        "serverOffline": "本地服务未启动，图片预览不可用",
        "postsPath": "文章目录",
        "imagesPath": "图片目录",
        "language": "语言",
        "theme": "主题",
        "browse": "浏览…",
        "cancel": "取消",
        "markdownSource": "Markdown 源码",
        "preview": "预览",
        "noPostSelected": "请选择或新建一篇文章",
    },
    "en": {
        "posts": "Posts",
        "assets": "Assets",
        "search": "Search posts…",
        "newPost": "New Post",
        "save": "Save",
        "delete": "Delete",
        "refresh": "Refresh",
        "settings": "Settings",
        "toggleTheme": "Toggle Theme",
        "editMode": "Edit",
        "previewMode": "Preview",
        "splitMode": "Split",
        "upload": "Upload Image",
        "copyPath": "Copy Markdown",
        "rename": "Rename",
        "renamePrompt": "New file name:",
        "uploadFolder": "Target folder (empty for root):",
        "fileExist": "File already exists",
        "deleteConfirm": "Move this file to the trash?",
        "unsaved": "You have unsaved changes. Switch anyway",
        "saved": "Saved",
        "saveFailed": "Save failed",
        "renameFailed": "Rename failed",
        "deleteFailed": "Delete failed",
        "uploadFailed": "Upload failed",
        "copied": "Copied to clipboard",
        "configureFirst": "Configure the posts and images folders in Settings first",
        "serverOffline": "Local server is not running; image preview unavailable",
        "postsPath": "Posts folder",
        "imagesPath": "Images folder",
        "language": "Language",
        "theme": "Theme",
        "browse": "Browse…",
        "cancel": "Cancel",
        "markdownSource": "Markdown Source",
        "preview": "Preview",
        "noPostSelected": "Select or create a post",
    },
}


def translate(language: str, key: str) -> str:
    """Look `key` up for `language`, falling back to Chinese, then to the key itself."""
    table = TRANSLATIONS.get(language) or TRANSLATIONS[DEFAULT_LANGUAGE]
    return table.get(key, key)

import unittest

from langsync.core.language import (
    APPLE_LOCALES,
    DEFAULT_LANGUAGE,
    DEFAULT_LOCALE,
    locale_language,
    to_backend_locale,
    to_canonical,
)


class ToCanonicalTests(unittest.TestCase):
    def test_chinese_script_variants_fold_to_zh(self):
        for raw in ("zh-Hans", "zh-Hant", "ZH-HANS-CN", "zh-hant-TW", "zh-Hans_extra"):
            self.assertEqual(to_canonical(raw), "zh", raw)

    def test_cantonese_script_variants_fold_to_yue(self):
        for raw in ("yue-Hans", "yue-Hant", "YUE-HANT-HK"):
            self.assertEqual(to_canonical(raw), "yue", raw)

    def test_base_code_aliases(self):
        self.assertEqual(to_canonical("nb"), "no")
        self.assertEqual(to_canonical("nb-NO"), "no")
        self.assertEqual(to_canonical("cmn"), "zh")
        self.assertEqual(to_canonical("cmn-Hans-CN"), "zh")

    def test_region_is_dropped(self):
        self.assertEqual(to_canonical("fr-CA"), "fr")
        self.assertEqual(to_canonical("en-GB"), "en")

    def test_unknown_base_code_passes_through_lowercased(self):
        self.assertEqual(to_canonical("XX-yy"), "xx")
        self.assertEqual(to_canonical("De"), "de")

    def test_plain_zh_and_yue_pass_through(self):
        self.assertEqual(to_canonical("zh"), "zh")
        self.assertEqual(to_canonical("yue"), "yue")

    def test_empty_identifier_falls_back_to_default(self):
        self.assertEqual(to_canonical(""), DEFAULT_LANGUAGE)
        self.assertEqual(to_canonical(None), DEFAULT_LANGUAGE)
        self.assertEqual(to_canonical("-US"), DEFAULT_LANGUAGE)


class ToBackendLocaleTests(unittest.TestCase):
    def test_every_table_entry_maps(self):
        for code, locale in APPLE_LOCALES.items():
            self.assertEqual(to_backend_locale(code), locale)
        self.assertEqual(to_backend_locale("ja"), "ja-JP")
        self.assertEqual(to_backend_locale("zh"), "zh-CN")

    def test_unknown_code_defaults_to_en_us(self):
        self.assertEqual(to_backend_locale("th"), DEFAULT_LOCALE)
        self.assertEqual(to_backend_locale(""), "en-US")

    def test_custom_table_and_default(self):
        self.assertEqual(to_backend_locale("nl", {"nl": "nl"}, "en"), "nl")
        self.assertEqual(to_backend_locale("th", {"nl": "nl"}, "en"), "en")

    def test_locale_language(self):
        self.assertEqual(locale_language("zh-CN"), "zh")
        self.assertEqual(locale_language("yue_CN"), "yue")
        self.assertEqual(locale_language("en"), "en")


if __name__ == "__main__":
    unittest.main()

"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Keeps messages testable and consistently formatted, and documents every
    error case in one place.
    """

    @staticmethod
    def invalid_json(locator: str, detail: str, span: SourceSpan | None) -> Diagnostic:
        """Document text is not valid JSON.

        Args:
            locator: Document that failed to parse
            detail: Decoder message
            span: Position of the decoding failure

        Returns:
            Diagnostic for PARSE_INVALID_JSON
        """
        msg = f"Document '{locator}' is not valid JSON: {detail}"
        return Diagnostic(
            code=DiagnosticCode.PARSE_INVALID_JSON,
            message=msg,
            span=span,
            hint="Fix the JSON syntax; the document was skipped",
            locator=locator,
        )

    @staticmethod
    def not_an_object(locator: str, type_name: str) -> Diagnostic:
        """Document top level is not a JSON object.

        Args:
            locator: Document that failed to parse
            type_name: JSON type found at the top level

        Returns:
            Diagnostic for PARSE_NOT_AN_OBJECT
        """
        msg = f"Document '{locator}' must contain a JSON object, found {type_name}"
        return Diagnostic(
            code=DiagnosticCode.PARSE_NOT_AN_OBJECT,
            message=msg,
            hint="ARB documents map keys to strings at the top level",
            locator=locator,
        )

    @staticmethod
    def invalid_metadata(locator: str, key: str, detail: str) -> Diagnostic:
        """Entry metadata object has an unexpected shape.

        Args:
            locator: Document being parsed
            key: Translation key whose @key object is malformed
            detail: What was wrong

        Returns:
            Diagnostic for PARSE_INVALID_METADATA
        """
        msg = f"Metadata for key '{key}' in '{locator}' is malformed: {detail}"
        return Diagnostic(
            code=DiagnosticCode.PARSE_INVALID_METADATA,
            message=msg,
            hint=f"'@{key}' must be an object with optional description and placeholders",
            locator=locator,
            key=key,
        )

    @staticmethod
    def invalid_encoding(locator: str, detail: str) -> Diagnostic:
        """Document bytes are not valid UTF-8."""
        msg = f"Document '{locator}' is not valid UTF-8: {detail}"
        return Diagnostic(
            code=DiagnosticCode.PARSE_INVALID_ENCODING,
            message=msg,
            hint="Re-save the file as UTF-8; the document was skipped",
            locator=locator,
        )

    @staticmethod
    def document_duplicate_key(locale: str, key: str) -> Diagnostic:
        """Document constructed with two entries for one key.

        Args:
            locale: Locale of the document
            key: Repeated key

        Returns:
            Diagnostic for DOCUMENT_DUPLICATE_KEY
        """
        msg = f"Document '{locale}' contains key '{key}' more than once"
        return Diagnostic(
            code=DiagnosticCode.DOCUMENT_DUPLICATE_KEY,
            message=msg,
            locale=locale,
            key=key,
        )

    @staticmethod
    def duplicate_key(key: str, locale: str) -> Diagnostic:
        """Key already present in the set.

        Args:
            key: Rejected key
            locale: First locale found to contain the key

        Returns:
            Diagnostic for DUPLICATE_KEY
        """
        msg = f"Key '{key}' already exists (found in '{locale}')"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_KEY,
            message=msg,
            hint="Choose a different key or edit the existing entry",
            locale=locale,
            key=key,
        )

    @staticmethod
    def unknown_locale(locale: str, available: tuple[str, ...]) -> Diagnostic:
        """No document for the requested locale.

        Args:
            locale: Requested locale
            available: Locales present in the set

        Returns:
            Diagnostic for UNKNOWN_LOCALE
        """
        msg = f"No document for locale '{locale}'"
        shown = ", ".join(available) if available else "none"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_LOCALE,
            message=msg,
            hint=f"Available locales: {shown}",
            locale=locale,
        )

    @staticmethod
    def unknown_key(key: str, locale: str | None = None) -> Diagnostic:
        """Key missing from one document or from all of them.

        Args:
            key: Requested key
            locale: Document that was searched, None for every document

        Returns:
            Diagnostic for UNKNOWN_KEY
        """
        if locale is None:
            msg = f"Key '{key}' does not exist in any document"
            hint = "Add the key first"
        else:
            msg = f"Key '{key}' does not exist in document '{locale}'"
            hint = "Synchronize the key into this locale first"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_KEY,
            message=msg,
            hint=hint,
            locale=locale,
            key=key,
        )

    @staticmethod
    def invalid_key(key: str) -> Diagnostic:
        """Key is empty or uses the metadata prefix.

        Args:
            key: Rejected key

        Returns:
            Diagnostic for INVALID_KEY
        """
        msg = f"Invalid translation key {key!r}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_KEY,
            message=msg,
            hint="Keys must be non-empty and must not start with '@'",
            key=key,
        )

    @staticmethod
    def duplicate_locale(locale: str) -> Diagnostic:
        """Second document for an already registered locale.

        Args:
            locale: Repeated locale

        Returns:
            Diagnostic for DUPLICATE_LOCALE
        """
        msg = f"DocumentSet already contains a document for locale '{locale}'"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_LOCALE,
            message=msg,
            hint="Use replace_document() to refresh a reloaded document",
            locale=locale,
        )

    @staticmethod
    def no_matching_locales(columns: tuple[str, ...], locales: tuple[str, ...]) -> Diagnostic:
        """Tabular import matched no locale column.

        Args:
            columns: Columns offered by the import
            locales: Locales of the DocumentSet

        Returns:
            Diagnostic for NO_MATCHING_LOCALES
        """
        offered = ", ".join(columns) if columns else "none"
        msg = f"No matching locales found between sheet columns ({offered}) and documents"
        return Diagnostic(
            code=DiagnosticCode.NO_MATCHING_LOCALES,
            message=msg,
            hint=f"Locale columns must equal one of: {', '.join(locales)}",
        )

    @staticmethod
    def workbook_empty(source: str) -> Diagnostic:
        """Workbook has a header but no data rows.

        Args:
            source: Workbook description

        Returns:
            Diagnostic for WORKBOOK_EMPTY
        """
        msg = f"No data found in workbook '{source}'"
        return Diagnostic(
            code=DiagnosticCode.WORKBOOK_EMPTY,
            message=msg,
            locator=source,
        )

    @staticmethod
    def workbook_no_header(source: str) -> Diagnostic:
        """Workbook first sheet is empty.

        Args:
            source: Workbook description

        Returns:
            Diagnostic for WORKBOOK_NO_HEADER
        """
        msg = f"Workbook '{source}' has no header row"
        return Diagnostic(
            code=DiagnosticCode.WORKBOOK_NO_HEADER,
            message=msg,
            hint="The first row must hold the key, description and locale column names",
            locator=source,
        )

    @staticmethod
    def workbook_unreadable(source: str, detail: str) -> Diagnostic:
        """Workbook could not be opened.

        Args:
            source: Workbook description
            detail: Reader error message

        Returns:
            Diagnostic for WORKBOOK_UNREADABLE
        """
        msg = f"Cannot read workbook '{source}': {detail}"
        return Diagnostic(
            code=DiagnosticCode.WORKBOOK_UNREADABLE,
            message=msg,
            hint="Export the sheet as .xlsx",
            locator=source,
        )

    @staticmethod
    def path_unsafe(locator: str, root: str) -> Diagnostic:
        """Locator resolves outside the store root.

        Args:
            locator: Rejected locator
            root: Store root directory

        Returns:
            Diagnostic for STORAGE_PATH_UNSAFE
        """
        msg = f"Path traversal detected: '{locator}' escapes root directory '{root}'"
        return Diagnostic(
            code=DiagnosticCode.STORAGE_PATH_UNSAFE,
            message=msg,
            locator=locator,
        )

"""Static FL-320 field catalog: legacy index table, descriptors, default positions."""

from __future__ import annotations

from formmapper.model.field import FieldDescriptor, FieldPosition, FieldType

# Shipped index assignments. Persisted data references some fields by these
# numbers, so entries may be appended but never renumbered.
LEGACY_FIELD_INDEX: dict[str, int] = {
    # Party / attorney
    "partyName": 0,
    "firmName": 1,
    "streetAddress": 2,
    "mailingAddress": 3,
    "city": 4,
    "state": 5,
    "zipCode": 6,
    "telephoneNo": 7,
    "faxNo": 8,
    "email": 9,
    "attorneyFor": 10,
    "stateBarNumber": 11,
    # Court
    "county": 12,
    "courtStreetAddress": 13,
    "courtMailingAddress": 14,
    "courtCityAndZip": 15,
    "branchName": 16,
    # Case and hearing
    "petitioner": 17,
    "respondent": 18,
    "otherParentParty": 19,
    "caseNumber": 20,
    "hearingDate": 21,
    "hearingTime": 22,
    "hearingDepartment": 23,
    "hearingRoom": 24,
    # Item 1
    "restrainingOrderNone": 25,
    "restrainingOrderActive": 26,
    # Item 2
    "childCustodyConsent": 27,
    "visitationConsent": 28,
    "childCustodyDoNotConsent": 29,
    "visitationDoNotConsent": 30,
    "custodyAlternativeOrder": 31,
    # Item 3
    "childSupportFiledFL150": 32,
    "childSupportConsent": 33,
    "childSupportGuidelineConsent": 34,
    "childSupportDoNotConsent": 35,
    "childSupportAlternativeOrder": 36,
    # Item 4
    "spousalSupportFiledFL150": 37,
    "spousalSupportConsent": 38,
    "spousalSupportDoNotConsent": 39,
    "spousalSupportAlternativeOrder": 40,
    # Item 5
    "propertyControlConsent": 41,
    "propertyControlDoNotConsent": 42,
    "propertyControlAlternativeOrder": 43,
    # Item 6
    "attorneyFeesFiledFL150": 44,
    "attorneyFeesFiledFL158": 45,
    "attorneyFeesConsent": 46,
    "attorneyFeesDoNotConsent": 47,
    "attorneyFeesAlternativeOrder": 48,
    # Item 7
    "domesticViolenceConsent": 49,
    "domesticViolenceDoNotConsent": 50,
    "domesticViolenceAlternativeOrder": 51,
    # Item 8
    "otherOrdersConsent": 52,
    "otherOrdersDoNotConsent": 53,
    "otherOrdersAlternativeOrder": 54,
    # Item 9
    "timeForServiceConsent": 55,
    "timeForServiceDoNotConsent": 56,
    "timeForServiceAlternativeOrder": 57,
    # Item 10
    "facts": 58,
    "factsAttachment": 59,
    # Signature
    "declarationUnderPenalty": 60,
    "signatureDate": 61,
    "printName": 62,
    "signatureName": 63,
}

_I = FieldType.INPUT
_C = FieldType.CHECKBOX
_T = FieldType.TEXTAREA

_CATALOG_ROWS: list[tuple[str, str, FieldType, int]] = [
    ("partyName", "Name", _I, 1),
    ("firmName", "Firm Name", _I, 1),
    ("streetAddress", "Street Address", _I, 1),
    ("mailingAddress", "Mailing Address", _I, 1),
    ("city", "City", _I, 1),
    ("state", "State", _I, 1),
    ("zipCode", "ZIP Code", _I, 1),
    ("telephoneNo", "Telephone", _I, 1),
    ("faxNo", "Fax", _I, 1),
    ("email", "Email", _I, 1),
    ("attorneyFor", "Attorney For", _I, 1),
    ("stateBarNumber", "State Bar Number", _I, 1),
    ("county", "County", _I, 1),
    ("courtStreetAddress", "Court Street Address", _I, 1),
    ("courtMailingAddress", "Court Mailing Address", _I, 1),
    ("courtCityAndZip", "Court City and ZIP", _I, 1),
    ("branchName", "Branch Name", _I, 1),
    ("petitioner", "Petitioner", _I, 1),
    ("respondent", "Respondent", _I, 1),
    ("otherParentParty", "Other Parent/Party", _I, 1),
    ("caseNumber", "Case Number", _I, 1),
    ("hearingDate", "Hearing Date", FieldType.DATE, 1),
    ("hearingTime", "Hearing Time", _I, 1),
    ("hearingDepartment", "Department", _I, 1),
    ("hearingRoom", "Room", _I, 1),
    ("restrainingOrderNone", "No restraining orders", _C, 1),
    ("restrainingOrderActive", "Restraining orders active", _C, 1),
    ("childCustodyConsent", "Consent to custody order", _C, 1),
    ("visitationConsent", "Consent to visitation order", _C, 1),
    ("childCustodyDoNotConsent", "Do not consent to custody", _C, 1),
    ("visitationDoNotConsent", "Do not consent to visitation", _C, 1),
    ("custodyAlternativeOrder", "Request alternative custody order", _T, 1),
    ("childSupportFiledFL150", "Filed Income and Expense Declaration (FL-150)", _C, 2),
    ("childSupportConsent", "Consent to child support order", _C, 2),
    ("childSupportGuidelineConsent", "Consent to guideline child support", _C, 2),
    ("childSupportDoNotConsent", "Do not consent to child support", _C, 2),
    ("childSupportAlternativeOrder", "Request alternative support amount", _T, 2),
    ("spousalSupportFiledFL150", "Filed Income and Expense Declaration (FL-150)", _C, 2),
    ("spousalSupportConsent", "Consent to spousal support order", _C, 2),
    ("spousalSupportDoNotConsent", "Do not consent to spousal support", _C, 2),
    ("spousalSupportAlternativeOrder", "Request alternative spousal support", _T, 2),
    ("propertyControlConsent", "Consent to property control order", _C, 2),
    ("propertyControlDoNotConsent", "Do not consent to property control", _C, 2),
    ("propertyControlAlternativeOrder", "Request alternative property order", _T, 2),
    ("attorneyFeesFiledFL150", "Fees: filed FL-150", _C, 2),
    ("attorneyFeesFiledFL158", "Fees: filed FL-158", _C, 2),
    ("attorneyFeesConsent", "Consent to attorney fees order", _C, 2),
    ("attorneyFeesDoNotConsent", "Do not consent to attorney fees", _C, 2),
    ("attorneyFeesAlternativeOrder", "Request alternative fees/costs order", _T, 2),
    ("domesticViolenceConsent", "Consent to domestic violence order", _C, 3),
    ("domesticViolenceDoNotConsent", "Do not consent to domestic violence order", _C, 3),
    ("domesticViolenceAlternativeOrder", "Request alternative domestic violence order", _T, 3),
    ("otherOrdersConsent", "Consent to other orders", _C, 3),
    ("otherOrdersDoNotConsent", "Do not consent to other orders", _C, 3),
    ("otherOrdersAlternativeOrder", "Request alternative other orders", _T, 3),
    ("timeForServiceConsent", "Consent to time for service", _C, 3),
    ("timeForServiceDoNotConsent", "Do not consent to time for service", _C, 3),
    ("timeForServiceAlternativeOrder", "Request alternative service time", _T, 3),
    ("facts", "Facts supporting your position", _T, 3),
    ("factsAttachment", "Facts continued on attachment", _C, 3),
    ("declarationUnderPenalty", "Declaration under penalty of perjury", _C, 3),
    ("signatureDate", "Signature Date", FieldType.DATE, 3),
    ("printName", "Print Name", _I, 3),
    ("signatureName", "Signature", FieldType.SIGNATURE, 3),
]

FL320_FIELDS: list[FieldDescriptor] = [
    FieldDescriptor(name=name, label=label, field_type=field_type, page=page)
    for name, label, field_type, page in _CATALOG_ROWS
]

DEFAULT_POSITIONS: dict[str, FieldPosition] = {
    "partyName": FieldPosition(top=15.8, left=5),
    "streetAddress": FieldPosition(top=19, left=5),
    "city": FieldPosition(top=22.5, left=5),
    "state": FieldPosition(top=22.5, left=29.5),
    "zipCode": FieldPosition(top=22.5, left=38),
    "telephoneNo": FieldPosition(top=25.8, left=5),
    "faxNo": FieldPosition(top=25.8, left=23),
    "email": FieldPosition(top=29.2, left=5),
    "attorneyFor": FieldPosition(top=32.5, left=5),
}

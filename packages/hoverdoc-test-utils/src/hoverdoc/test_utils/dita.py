from typing import Iterable, Optional, Tuple


def dita_operation(
    name: str,
    desc: str = "",
    params: Iterable[Tuple[str, str]] = (),
    returns: Optional[str] = None,
    shortdesc: str = "",
) -> str:
    param_xml = "".join(
        f"<apiParam><apiItemName>{p}</apiItemName><apiDesc>{d}</apiDesc></apiParam>"
        for p, d in params
    )
    return_xml = f"<apiReturn><apiDesc>{returns}</apiDesc></apiReturn>" if returns else ""
    return (
        f"<apiOperation><apiName>{name}</apiName><shortdesc>{shortdesc}</shortdesc>"
        f"<apiOperationDetail><apiOperationDef>{param_xml}{return_xml}</apiOperationDef>"
        f"<apiDesc>{desc}</apiDesc></apiOperationDetail></apiOperation>"
    )


def dita_value(name: str, desc: str = "") -> str:
    return (
        f"<apiValue><apiName>{name}</apiName>"
        f"<apiValueDetail><apiDesc>{desc}</apiDesc></apiValueDetail></apiValue>"
    )


def dita_classifier(name: str, desc: str = "", members: Iterable[str] = ()) -> str:
    return (
        f"<apiClassifier><apiName>{name}</apiName>"
        f"<apiClassifierDetail><apiDesc>{desc}</apiDesc></apiClassifierDetail>"
        f"{''.join(members)}</apiClassifier>"
    )


def dita_package(name: str, *items: str) -> str:
    return f'<apiPackage id="{name}"><apiName>{name}</apiName>{"".join(items)}</apiPackage>'


def dita_map(*hrefs: str) -> str:
    refs = "".join(f'<apiItemRef href="{href}"/>' for href in hrefs)
    return f'<?xml version="1.0" encoding="UTF-8"?><apiMap id="packages">{refs}</apiMap>'

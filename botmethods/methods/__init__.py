"""One class per Bot API method, grouped by area."""

from botmethods.methods.base import TelegramMethod
from botmethods.methods.gifts import GetAvailableGifts, SendGift
from botmethods.methods.inline import AnswerInlineQuery, AnswerWebAppQuery, SavePreparedInlineMessage
from botmethods.methods.messages import GetMe, SendMessage
from botmethods.methods.payments import (
    AnswerPreCheckoutQuery,
    AnswerShippingQuery,
    CreateInvoiceLink,
    EditUserStarSubscription,
    GetStarTransactions,
    RefundStarPayment,
    SendInvoice,
)
from botmethods.methods.stickers import (
    AddStickerToSet,
    CreateNewStickerSet,
    DeleteStickerFromSet,
    DeleteStickerSet,
    GetCustomEmojiStickers,
    GetStickerSet,
    ReplaceStickerInSet,
    SendSticker,
    SetCustomEmojiStickerSetThumbnail,
    SetStickerEmojiList,
    SetStickerKeywords,
    SetStickerMaskPosition,
    SetStickerPositionInSet,
    SetStickerSetThumbnail,
    SetStickerSetTitle,
    UploadStickerFile,
)

__all__ = [
    "TelegramMethod",
    "AnswerInlineQuery",
    "AnswerWebAppQuery",
    "SavePreparedInlineMessage",
    "SendInvoice",
    "CreateInvoiceLink",
    "AnswerShippingQuery",
    "AnswerPreCheckoutQuery",
    "GetStarTransactions",
    "RefundStarPayment",
    "EditUserStarSubscription",
    "SendSticker",
    "GetStickerSet",
    "GetCustomEmojiStickers",
    "UploadStickerFile",
    "CreateNewStickerSet",
    "AddStickerToSet",
    "SetStickerPositionInSet",
    "DeleteStickerFromSet",
    "ReplaceStickerInSet",
    "SetStickerEmojiList",
    "SetStickerKeywords",
    "SetStickerMaskPosition",
    "SetStickerSetTitle",
    "SetStickerSetThumbnail",
    "SetCustomEmojiStickerSetThumbnail",
    "DeleteStickerSet",
    "GetAvailableGifts",
    "SendGift",
    "GetMe",
    "SendMessage",
]
